"""Accounting category names and confidence levels."""
from statementflow.models import UNCATEGORIZED

# Schedule C style categories used by the built-in rules
ADVERTISING = "Advertising"
BANK_SERVICE_CHARGES = "Bank Service Charges"
BUSINESS_INCOME = "Business Income"
CAR_AND_TRUCK = "Car and Truck Expenses"
INSURANCE = "Insurance"
LEGAL_AND_PROFESSIONAL = "Legal and Professional Services"
MEALS_AND_ENTERTAINMENT = "Meals and Entertainment"
OFFICE_EXPENSES = "Office Expenses"
OTHER_EXPENSES = "Other Expenses"
PHONE_AND_INTERNET = "Phone and Internet"
TRAVEL = "Travel"
UTILITIES = "Utilities"
ATM_WITHDRAWAL = "ATM Withdrawal"

CONFIDENCE_LEARNED = 0.9
CONFIDENCE_HIGH = 0.8
CONFIDENCE_LOW = 0.3
# Structural matches (ATM withdrawals) do not go through keyword guessing
CONFIDENCE_CERTAIN = 1.0

__all__ = [
    "UNCATEGORIZED",
    "ADVERTISING",
    "BANK_SERVICE_CHARGES",
    "BUSINESS_INCOME",
    "CAR_AND_TRUCK",
    "INSURANCE",
    "LEGAL_AND_PROFESSIONAL",
    "MEALS_AND_ENTERTAINMENT",
    "OFFICE_EXPENSES",
    "OTHER_EXPENSES",
    "PHONE_AND_INTERNET",
    "TRAVEL",
    "UTILITIES",
    "ATM_WITHDRAWAL",
    "CONFIDENCE_LEARNED",
    "CONFIDENCE_HIGH",
    "CONFIDENCE_LOW",
    "CONFIDENCE_CERTAIN",
]
