from enum import Enum


class ProductStatus(str, Enum):

    awaiting_commissioning = "awaiting-commissioning"
    active = "active"
    under_service = "under-service"
    in_preventive_maintenance = "in-preventive-maintenance"
    decommissioned = "decommissioned"


class ProductCondition(str, Enum):

    excellent = "excellent"
    good = "good"
    fair = "fair"
    poor = "poor"


class CommissioningOutcome(str, Enum):

    passed = "pass"
    failed = "fail"


class MaintenanceType(str, Enum):

    service = "service"
    preventive_maintenance = "preventive-maintenance"


class MaintenanceRecurrency(str, Enum):

    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    quarterly = "quarterly"
    semi_annually = "semi-annually"
    annually = "annually"
