"""Pydantic schemas for Accounts Service."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AccountCreate(BaseModel):
    """Schema for creating an account."""

    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class AccountResponse(AccountCreate):
    """Account response schema."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)
