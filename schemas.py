"""
Database Schemas

Pydantic models for the MongoDB collections and for the request bodies of each
route. Stored documents are flat; the collection for each resource comes from
Settings.collections.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

Role = Literal["student", "tutor", "admin", "customer", "seller"]
SessionStatus = Literal["pending", "approved", "rejected"]
OrderStatus = Literal["pending", "paid", "shipped", "delivered", "cancelled"]


class UpdateModel(BaseModel):
    """Base for PATCH bodies: unknown or explicitly null fields are rejected instead of written."""

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def reject_nulls(self):
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


# Collection: user
class User(BaseModel):
    name: Optional[str] = None
    email: EmailStr
    password_hash: str = Field(..., description="BCrypt hashed password")
    role: Role = "student"
    photo_url: Optional[str] = None


class UserCreate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6)
    role: Role
    photo_url: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Password must not be blank")
        return value


class UserRoleUpdate(UpdateModel):
    role: Role = "admin"


class LoginInput(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


# Collection: session
class SessionCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    tutor_name: Optional[str] = None
    tutor_email: EmailStr
    registration_start: Optional[str] = None
    registration_end: Optional[str] = None
    class_start: Optional[str] = None
    class_end: Optional[str] = None
    duration: Optional[str] = None
    registration_fee: float = Field(0, ge=0)
    status: SessionStatus = "pending"


class SessionUpdate(UpdateModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    tutor_name: Optional[str] = None
    registration_start: Optional[str] = None
    registration_end: Optional[str] = None
    class_start: Optional[str] = None
    class_end: Optional[str] = None
    duration: Optional[str] = None
    registration_fee: Optional[float] = Field(None, ge=0)
    status: Optional[SessionStatus] = None


# Collection: material
class MaterialCreate(BaseModel):
    title: str = Field(..., min_length=1)
    session_id: str
    tutor_email: EmailStr
    image_urls: List[str] = Field(default_factory=list)
    drive_link: Optional[str] = None


class MaterialUpdate(UpdateModel):
    title: Optional[str] = Field(None, min_length=1)
    tutor_email: Optional[EmailStr] = None
    image_urls: Optional[List[str]] = None
    drive_link: Optional[str] = None


# Collection: booked
class BookingCreate(BaseModel):
    session_id: str
    student_email: EmailStr
    tutor_email: Optional[EmailStr] = None
    registration_fee: float = Field(0, ge=0)


# Collection: product
class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=140)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    category: str
    image: Optional[str] = None
    seller_email: EmailStr
    rating: float = Field(0, ge=0, le=5)
    stock: int = Field(0, ge=0)


class ProductUpdate(UpdateModel):
    name: Optional[str] = Field(None, min_length=1, max_length=140)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    stock: Optional[int] = Field(None, ge=0)


# Collection: order
class OrderCreate(BaseModel):
    product_id: str
    customer_email: EmailStr
    quantity: int = Field(1, ge=1)
    shipping_address: Optional[str] = None


class OrderUpdate(UpdateModel):
    status: Optional[OrderStatus] = None
    shipping_address: Optional[str] = None


# Collection: wishlist
class WishlistCreate(BaseModel):
    customer_email: EmailStr
    product_id: str
