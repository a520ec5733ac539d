"""Manufacturer identifiers, the name registry, and file helpers."""

from .manufacturer import (
    Development,
    Extended,
    ManufacturerGroup,
    ManufacturerId,
    Standard,
    find_manufacturer,
)
