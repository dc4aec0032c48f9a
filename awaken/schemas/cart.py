"""Cart line schemas used when submitting an order."""

from pydantic import BaseModel, Field

from awaken.schemas.customization import Customization


class CartLine(BaseModel):
    """Drink in the cart with the customer's customizations."""

    id: str
    drink_id: str
    drink_name: str
    drink_category: str
    quantity: int = Field(default=1, ge=1)
    size: str = "12oz"
    customizations: list[Customization] = Field(default_factory=list)
    base_price: int = Field(default=0, ge=0)

    @property
    def total_price(self) -> int:
        """Customizations are free, so a line costs base price times quantity."""
        return self.base_price * self.quantity
