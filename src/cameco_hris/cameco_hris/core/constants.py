"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Role

DEFAULT_SESSION_DAYS = 7

# System onboarding ownership moves strictly forward along this order.
OWNER_ROLE_ORDER = (Role.SUPER_ADMIN, Role.OFFICE_ADMIN, Role.HR_MANAGER)

ALLOWED_COUNTRIES = ("PH", "US", "SG", "TH", "JP")
ALLOWED_CURRENCIES = ("PHP", "USD", "SGD", "THB", "JPY")

EMPLOYMENT_TYPES = ("regular", "contractual", "probationary", "consultant")
GENDERS = ("male", "female")
CIVIL_STATUSES = ("single", "married", "divorced", "widowed")

# Default Philippine company structure; sub-departments reference their parent by code.
DEFAULT_DEPARTMENTS = (
    {"name": "Executive Management", "code": "EXEC", "description": "Executive leadership"},
    {"name": "Human Resources", "code": "HR", "description": "HR operations and services"},
    {"name": "Finance & Accounting", "code": "FIN", "description": "Finance and accounting services"},
    {"name": "Operations", "code": "OPS", "description": "Operations management"},
    {"name": "Sales & Marketing", "code": "SALES", "description": "Sales and marketing"},
    {"name": "IT & Technology", "code": "IT", "description": "IT and technology services"},
    {"name": "Administration", "code": "ADMIN", "description": "Administrative services"},
    {"name": "HR Operations", "code": "HR-OPS", "description": "HR day-to-day operations", "parent_code": "HR"},
    {"name": "Recruitment & Talent", "code": "HR-REC", "description": "Hiring and talent management", "parent_code": "HR"},
    {"name": "Accounts Payable", "code": "FIN-AP", "description": "AP management", "parent_code": "FIN"},
    {"name": "Accounts Receivable", "code": "FIN-AR", "description": "AR management", "parent_code": "FIN"},
    {"name": "Payroll", "code": "FIN-PAY", "description": "Payroll processing", "parent_code": "FIN"},
)
