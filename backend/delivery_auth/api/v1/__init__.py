"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1.0"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .customers import bp as customers_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .restaurants import bp as restaurants_bp  # noqa: E402
from .staff import bp as staff_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /v1.0
    (customers_bp, "/customers"),  # -> /v1.0/customers
    (restaurants_bp, "/restaurants"),
    (staff_bp, "/staff"),
]
