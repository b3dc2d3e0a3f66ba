from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    # Accept both the wire (camelCase) names and the python field names
    model_config = ConfigDict(populate_by_name=True)


class CreateCheckoutSessionBody(_CamelModel):
    price_id: str = Field(..., alias="priceId", min_length=1, description="Stripe price to subscribe to")


class CheckoutSessionCreated(_CamelModel):
    session_id: str = Field(..., alias="sessionId")


class CustomerPortalBody(_CamelModel):
    session_id: str = Field(..., alias="sessionId", min_length=1, description="Completed checkout session")


class CustomerPortalURL(BaseModel):
    url: str


class CheckoutSetup(_CamelModel):
    publishable_key: str = Field(..., alias="publishableKey")
    basic_price: str = Field(..., alias="basicPrice")
    pro_price: str = Field(..., alias="proPrice")


class CreateCustomerBody(BaseModel):
    payment_method: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    price_ids: List[str] = Field(..., min_length=1)


class SubscriptionLookupBody(_CamelModel):
    subscription_id: str = Field(..., alias="subscriptionId", min_length=1)


class PlanPrice(BaseModel):
    id: str
    unit_amount: Optional[int] = None


class PlanProduct(BaseModel):
    price: PlanPrice
    title: Optional[str] = None
    emoji: Optional[str] = None


class SetupPage(_CamelModel):
    public_key: str = Field(..., alias="publicKey")
    min_products_for_discount: int = Field(..., alias="minProductsForDiscount")
    discount_factor: float = Field(..., alias="discountFactor")
    products: List[PlanProduct] = []
