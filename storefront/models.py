"""Cart and checkout models for the storefront"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from payments.models import PaymentMethod

DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_SIZE = "Normal size"


class CartLineItem(BaseModel):
    """Item in a customer's cart"""
    model_config = ConfigDict(frozen=True)

    user_id: Optional[str] = None
    item_name: str
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)
    menu_img: str = ""
    categories_name: str = DEFAULT_CATEGORY
    size: str = DEFAULT_SIZE

    @field_validator("categories_name", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> Any:
        return value or DEFAULT_CATEGORY

    @field_validator("size", mode="before")
    @classmethod
    def _default_size(cls, value: Any) -> Any:
        return value or DEFAULT_SIZE

    @field_validator("menu_img", mode="before")
    @classmethod
    def _default_image(cls, value: Any) -> Any:
        return value or ""

    @property
    def line_total(self) -> float:
        return self.quantity * self.price

    def to_order_line(self, user_id: str) -> dict[str, Any]:
        """Denormalized line as sent to the backend"""
        return {
            "user_id": user_id,
            "item_name": self.item_name,
            "quantity": self.quantity,
            "price": self.price,
            "menu_img": self.menu_img,
            "final_total": self.line_total,
            "categories_name": self.categories_name,
            "size": self.size,
        }


class CheckoutRequest(BaseModel):
    """One checkout attempt: the items being ordered and how they are paid"""
    model_config = ConfigDict(frozen=True)

    user_id: str
    items: tuple[CartLineItem, ...] = Field(min_length=1)
    payment_method: PaymentMethod

    @property
    def grand_total(self) -> float:
        return sum(item.line_total for item in self.items)

    @property
    def amount_minor_units(self) -> int:
        return int(round(self.grand_total * 100))

    @property
    def order_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def lead_image(self) -> str:
        return self.items[0].menu_img if self.items else ""

    def order_lines(self) -> list[dict[str, Any]]:
        return [item.to_order_line(self.user_id) for item in self.items]
