"""
Reset the catalog collections and insert sample inventory.

    python seed.py
"""
from datetime import datetime, timedelta, timezone

import database
from database import create_document
from logger import get_logger
from schemas import MenuItem, Workshop, Artwork

logger = get_logger(__name__)

MENU = [
    MenuItem(name="Ethiopian Yirgacheffe", category="coffee", price=350,
             description="Bright acidity with floral notes.", tasting_notes="Jasmine, Lemon, Bergamot",
             tags=["fruity", "light roast", "black coffee", "smooth"],
             image_url="https://images.unsplash.com/photo-1497935586351-b67a49e012bf?w=400"),
    MenuItem(name="Sumatra Mandheling", category="coffee", price=380,
             description="Full-bodied dark roast.", tasting_notes="Dark Chocolate, Earthy, Spice",
             tags=["strong", "dark", "bold", "earthy"],
             image_url="https://images.unsplash.com/photo-1514432324607-a09d9b4aefdd?w=400"),
    MenuItem(name="Robusta Cold Brew", category="beverage", price=300,
             description="Steeped eighteen hours.", tasting_notes="Cocoa, Molasses",
             tags=["robusta", "intense", "cold"],
             image_url="https://images.unsplash.com/photo-1461023058943-07fcbe16d735?w=400"),
    MenuItem(name="Avocado Toast", category="food", price=450,
             description="Fresh avocado on sourdough.", tasting_notes="Savory, Fresh, Crunchy",
             tags=["breakfast", "healthy", "vegan"],
             image_url="https://images.unsplash.com/photo-1588137372308-15f75323a51d?w=400"),
]

WORKSHOPS = [
    Workshop(title="Latte Art Basics", date=datetime.now(timezone.utc) + timedelta(days=5), time="11:00",
             price=1200, capacity=12, category="Foundations", description="Learn to pour hearts and rosettas.",
             status="Approved", image_url="https://images.unsplash.com/photo-1551096038-f94d93026330?w=400"),
]

ARTWORKS = [
    Artwork(title="Midnight Reverie", artist_name="Elena Rodriguez", price=25000, medium="Oil on Canvas",
            tags=["abstract", "bold", "urban"],
            image_url="https://images.unsplash.com/photo-1579783902614-a3fb39279c15?w=400"),
    Artwork(title="Quiet Fields", artist_name="Arjun Mehta", price=18000, medium="Watercolour",
            tags=["nature", "landscape", "calm"],
            image_url="https://images.unsplash.com/photo-1500530855697-b586d89ba3ee?w=400"),
]


def seed():
    database._ensure_db()
    for collection, docs in (("menuitem", MENU), ("workshop", WORKSHOPS), ("artwork", ARTWORKS)):
        database.db[collection].delete_many({})
        for doc in docs:
            create_document(collection, doc)
        logger.info("Seeded %d documents into %s", len(docs), collection)


if __name__ == "__main__":
    seed()
