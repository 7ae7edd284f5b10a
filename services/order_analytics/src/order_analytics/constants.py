"""
Fixed vocabularies and thresholds used by the analyzers.

Keyword matching is substring based against lowercased, trimmed item names.
"""

from typing import Dict, List, Tuple

UNKNOWN_RESTAURANT = "Unknown Restaurant"
UNKNOWN_ITEM = "Unknown Item"

# Status substrings that exclude an order from analysis
EXCLUDED_STATUS_TOKENS: Tuple[str, ...] = ("cancel", "fail")

# Sunday-indexed, matches spending_by_day_of_week keys
DAY_NAMES: List[str] = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

FOOD_CATEGORIES: Dict[str, List[str]] = {
    "Burger": ["burger", "beef burger", "chicken burger"],
    "Pizza": ["pizza"],
    "Rice/Biriyani": ["rice", "biriyani", "biryani", "kacchi", "khichuri", "polao"],
    "Chicken": ["chicken", "grilled chicken", "fried chicken", "wings"],
    "Fast Food": ["fries", "sandwich", "wrap", "sub", "shawarma", "taco", "nachos"],
    "Drinks": [
        "coke",
        "pepsi",
        "juice",
        "water",
        "drink",
        "faluda",
        "shake",
        "smoothie",
        "coffee",
        "tea",
    ],
    "Dessert": [
        "ice cream",
        "cake",
        "dessert",
        "sweet",
        "kulfi",
        "waffle",
        "donut",
        "cookie",
        "brownie",
    ],
    "Pasta": ["pasta", "spaghetti", "lasagna", "macaroni"],
    "Healthy": ["salad", "soup", "veg", "fruit"],
}

# Add-on detection (order behavior)
ADDON_DRINK_KEYWORDS = ["coke", "pepsi", "juice", "water", "drink", "shake", "coffee", "tea"]
ADDON_DESSERT_KEYWORDS = ["ice cream", "cake", "dessert", "sweet", "waffle", "donut"]

# Health / dietary classification; sets may overlap
HEALTHY_KEYWORDS = ["salad", "soup", "veg", "fruit", "grilled"]
INDULGENT_KEYWORDS = ["burger", "pizza", "fries", "cake", "ice cream", "fried"]
HEALTH_DRINK_KEYWORDS = ["coke", "pepsi", "juice", "water", "drink", "shake"]

# Payment code substrings, checked in declaration order
PAYMENT_METHOD_MAPPING: Dict[str, str] = {
    "card": "Card",
    "creditcard": "Card",
    "bkash": "bKash",
    "delivery": "Cash on Delivery",
    "payment_on_delivery": "Cash on Delivery",
}

TOP_RESTAURANTS_LIMIT = 10
TOP_FOOD_ITEMS_LIMIT = 15
REORDERED_ITEMS_LIMIT = 10
REORDERED_ITEM_MIN_COUNT = 3

# Predictive model
RECENT_MONTHS_WINDOW = 6
TREND_CLAMP_PERCENT = 15.0
TREND_LABEL_THRESHOLD = 5.0
RECENT_WEIGHT = 0.7
LIFETIME_WEIGHT = 0.3

# Monthly spending percentile buckets, in the regional (BDT) cost baseline.
# Evaluated top-down with strict ">"; anything lower maps to 30.
SPENDING_PERCENTILE_BUCKETS: List[Tuple[float, int]] = [
    (30000, 90),
    (20000, 75),
    (15000, 60),
    (10000, 45),
]
DEFAULT_SPENDING_PERCENTILE = 30
EMPTY_SPENDING_PERCENTILE = 50
