"""
Database Schemas for the Robusta café

Each Pydantic model below corresponds to a MongoDB collection.
The collection name is the lowercase class name (e.g., MenuItem -> "menuitem").
"""
from datetime import datetime
from typing import List, Optional, Literal
from pydantic import BaseModel, Field, EmailStr, field_validator


UserRole = Literal["user", "admin"]
MenuCategory = Literal["coffee", "beverage", "food", "dessert"]
StockStatus = Literal["In Stock", "Out of Stock"]
WorkshopStatus = Literal["Pending", "Approved", "Rejected"]
ItemType = Literal["menu", "artwork", "workshop"]
PaymentStatus = Literal["pending", "paid", "failed"]
OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
LeadStatus = Literal["New", "Contacted", "In Negotiation", "Rejected"]

ORDER_STATUSES = ["pending", "processing", "shipped", "delivered", "cancelled"]
LEAD_STATUSES = ["New", "Contacted", "In Negotiation", "Rejected"]
WORKSHOP_STATUSES = ["Pending", "Approved", "Rejected"]


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Tags are matched case-insensitively, so they are stored trimmed and lowercased."""
    if not tags:
        return []
    return [t.strip().lower() for t in tags if t and t.strip()]


class User(BaseModel):
    email: EmailStr = Field(..., description="Unique email address")
    name: str = Field(..., description="Display name")
    role: UserRole = Field("user", description="Access level")
    firebase_uid: Optional[str] = Field(None, description="External identity reference")


class MenuItem(BaseModel):
    name: str = Field(..., min_length=1, description="Item name")
    description: Optional[str] = None
    category: MenuCategory = Field(..., description="Menu section")
    price: float = Field(..., ge=0)
    tags: List[str] = Field(default_factory=list, description="Used by pairing and chat context")
    tasting_notes: Optional[str] = None
    image_url: Optional[str] = None
    stock_status: StockStatus = "In Stock"

    @field_validator("tags")
    @classmethod
    def lowercase_tags(cls, v):
        return normalize_tags(v)


class Artist(BaseModel):
    user_id: str = Field(..., description="Owning user _id (one profile per user)")
    display_name: str = Field(..., min_length=1)
    bio: Optional[str] = None
    location: Optional[str] = None
    art_styles: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    instagram_url: Optional[str] = None
    website_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    is_featured: bool = False
    is_active: bool = True

    @field_validator("art_styles", "tags")
    @classmethod
    def lowercase_tags(cls, v):
        return normalize_tags(v)


class Artwork(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    artist_id: Optional[str] = Field(None, description="Reference to artist _id")
    artist_name: Optional[str] = None
    price: float = Field(0.0, ge=0)
    medium: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    is_available: bool = True

    @field_validator("tags")
    @classmethod
    def lowercase_tags(cls, v):
        return normalize_tags(v)


class Workshop(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    date: datetime = Field(..., description="Session date")
    time: Optional[str] = None
    category: Optional[str] = None
    price: float = Field(0.0, ge=0, description="0 means free")
    capacity: Optional[int] = Field(None, ge=0)
    tags: List[str] = Field(default_factory=list)
    status: WorkshopStatus = "Pending"
    is_active: bool = True
    image_url: Optional[str] = None

    @field_validator("tags")
    @classmethod
    def lowercase_tags(cls, v):
        return normalize_tags(v)


class OrderItem(BaseModel):
    item_id: str
    item_type: ItemType = "menu"
    name: Optional[str] = None
    price: float = Field(0.0, ge=0)
    quantity: int = Field(1, ge=1)


class Order(BaseModel):
    user_id: str = Field(..., description="User placing the order")
    items: List[OrderItem] = Field(default_factory=list)
    total_amount: float = Field(..., ge=0)
    currency: str = "INR"
    payment_status: PaymentStatus = "pending"
    order_status: OrderStatus = "pending"
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    failure_reason: Optional[str] = None


class Interaction(BaseModel):
    user_id: Optional[str] = Field(None, description="None for guests")
    query: str
    intent: str = "general_chat"
    response: str


class FranchiseLead(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    city: Optional[str] = None
    investment_capacity: Optional[str] = None
    message: Optional[str] = None
    status: LeadStatus = "New"


class EmailTemplate(BaseModel):
    template_name: str
    subject: str
    html_content: str
