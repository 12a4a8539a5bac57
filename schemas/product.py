from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: str
    name: str
    tags: list[str] = Field(default_factory=list)
    shortDescription: str = ""
    description: str = ""
    price: float | None = None
    imageUrl1: str | None = None
    imageUrl2: str | None = None
    imageUrl3: str | None = None
