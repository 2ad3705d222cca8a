"""
Tenant status derivation

Pure functions over a tenant's dates and an explicit `now`:

  calculate_status     - pending / active / inactive
  rental_duration_days - whole days between check-in and check-out (or now)
  calculate_total_rent - rent owed for the stay so far
"""
from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


class TenantStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"


class RentalBasis(str, Enum):
    MONTHLY = "monthly"
    DAILY = "daily"


def calculate_status(
    checkin_date: datetime,
    checkout_date: Optional[datetime],
    now: datetime,
) -> TenantStatus:
    """First matching rule wins: future check-in, past check-out, otherwise active."""
    if checkin_date > now:
        return TenantStatus.PENDING

    if checkout_date is not None and checkout_date <= now:
        return TenantStatus.INACTIVE

    return TenantStatus.ACTIVE


def ceil_days(start: datetime, end: datetime) -> int:
    """Absolute distance between two datetimes in days, rounded up."""
    seconds = abs((end - start).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY)


def rental_duration_days(
    checkin_date: Optional[datetime],
    checkout_date: Optional[datetime],
    now: datetime,
) -> int:
    if checkin_date is None:
        return 0
    return ceil_days(checkin_date, checkout_date or now)


def calculate_total_rent(
    rental_basis: str,
    rent_amount: float,
    checkin_date: Optional[datetime],
    checkout_date: Optional[datetime],
    now: datetime,
) -> float:
    """Daily stays bill per started day; monthly stays carry the flat rent."""
    rent_amount = rent_amount or 0.0
    if RentalBasis(rental_basis) == RentalBasis.DAILY:
        return rent_amount * rental_duration_days(checkin_date, checkout_date, now)
    return rent_amount
