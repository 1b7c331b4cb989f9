# app/schemas/rental_schemas/money.py
from decimal import Decimal
from pydantic import Field, PlainSerializer
from typing_extensions import Annotated

# Decimal internally, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

PositiveDecimal = Annotated[Decimal, Field(gt=0, max_digits=12, decimal_places=2), PlainSerializer(float, return_type=float, when_used="json")]
NonNegativeDecimal = Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2), PlainSerializer(float, return_type=float, when_used="json")]
