from sqlalchemy import JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.dialects.postgresql import JSONB
import enum

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON on other backends (SQLite in tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


# ============================================================================
# ENUMS
# ============================================================================

class ResourceStatus(str, enum.Enum):
    """Availability of a resource listing"""
    AVAILABLE = "AVAILABLE"
    LIMITED = "LIMITED"
    UNAVAILABLE = "UNAVAILABLE"


class ResourceCategory(str, enum.Enum):
    """Closed set of resource categories used for validation and filtering"""
    HOUSING = "Housing"
    FOOD = "Food"
    HEALTHCARE = "Healthcare"
    EMPLOYMENT = "Employment"
    LEGAL = "Legal"
    TRANSPORTATION = "Transportation"
    CHILDCARE = "Childcare"
    SUBSTANCE_ABUSE = "Substance-Abuse"
    MENTAL_HEALTH = "Mental Health"
    EDUCATION = "Education"
    FINANCIAL_ASSISTANCE = "Financial Assistance"
    SENIOR_SERVICES = "Senior Services"
    VETERANS_SERVICES = "Veterans Services"
    CLOTHING = "Clothing"
    DOMESTIC_VIOLENCE = "Domestic Violence"
    CRISIS_SUPPORT = "Crisis Support"
    DISABILITY_SERVICES = "Disability Services"
    LGBTQ_SERVICES = "LGBTQ+ Services"


class UserRole(str, enum.Enum):
    """Directory user roles"""
    CASE_MANAGER = "CASE_MANAGER"
    ADMIN = "ADMIN"
