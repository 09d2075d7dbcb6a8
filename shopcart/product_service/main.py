# shopcart/product_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Product Service (dev mock)")


PRODUCTS = {
    "BW0jAAeDJmlZCF8i": {"id": "BW0jAAeDJmlZCF8i", "name": "UNIFACTOR Mens Running Shoes", "category": "Fashion", "cost": 50, "rating": 5, "image": "https://i.imgur.com/hl8HR4l.png"},
    "KCRwjF7lN97HnEaY": {"id": "KCRwjF7lN97HnEaY", "name": "YONEX Smash Badminton Racquet", "category": "Sports", "cost": 100, "rating": 5, "image": "https://i.imgur.com/lulqWzW.jpg"},
    "PmInA797xJhMIPti": {"id": "PmInA797xJhMIPti", "name": "Tan Leatherette Weekender Duffle", "category": "Fashion", "cost": 150, "rating": 4, "image": "https://i.imgur.com/ZgWdKnd.jpg"},
}

@app.get("/products")
def list_products():
    return list(PRODUCTS.values())

@app.get("/products/{product_id}")
def get_product(product_id: str):
    product = PRODUCTS.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
