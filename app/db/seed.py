"""Starter templates loaded into an empty database.

Ids line up with the entries of ``DEFAULT_OVERRIDES``.
"""

from typing import Any

SEED_TEMPLATES: list[dict[str, Any]] = [
    {
        "id": 1,
        "template_type": "real-estate",
        "subcategory": "residential-lease",
        "title": "Residential Lease Agreement",
        "description": "Fixed-term residential tenancy between a landlord and a tenant.",
        "language": "en",
        "jurisdiction": "Ontario",
        "template_content": (
            "RESIDENTIAL LEASE AGREEMENT\n\n"
            "This lease is made between [LESSOR] (the \"Landlord\") and [LESSEE] "
            "(the \"Tenant\") for the premises at [PREMISES].\n\n"
            "1. TERM. The tenancy begins on [COMMENCEMENT DATE] and ends on [TERMINATION DATE].\n"
            "2. RENT. Rent is [RENT AMOUNT] per month, due on the [DUE DAY] of each month.\n"
            "3. DEPOSIT. The Tenant has paid a security deposit of [SECURITY DEPOSIT].\n\n"
            "Signed: ______________________  ______________________\n"
        ),
        "fields": [
            {"name": "landlordName", "label": "Landlord Name", "type": "text", "required": True},
            {"name": "tenantName", "label": "Tenant Name", "type": "text", "required": True},
            {"name": "propertyAddress", "label": "Property Address", "type": "textarea", "required": True},
            {"name": "leaseStart", "label": "Lease Start", "type": "date", "required": True},
            {"name": "leaseEnd", "label": "Lease End", "type": "date", "required": True},
            {"name": "rentAmount", "label": "Rent Amount", "type": "number", "required": True, "minimum": 0},
            {"name": "dueDay", "label": "Due Day", "type": "text", "required": True},
            {"name": "securityDeposit", "label": "Security Deposit", "type": "number", "minimum": 0},
        ],
    },
    {
        "id": 2,
        "template_type": "civil",
        "subcategory": "demand-letter",
        "title": "Demand Letter for Payment",
        "description": "Formal demand for payment of an outstanding debt.",
        "language": "en",
        "jurisdiction": "Canada",
        "template_content": (
            "{{date}}\n\n"
            "To: [RECIPIENT]\n\n"
            "Dear {{recipientName}},\n\n"
            "This letter is a formal demand for payment of [AMOUNT OWED], which remains "
            "outstanding. Please pay the full amount by [DEADLINE]. If payment is not "
            "received by that date, I will pursue all remedies available to me without "
            "further notice.\n\n"
            "Sincerely,\n"
            "[SENDER]\n"
        ),
        "fields": [
            {"name": "date", "label": "Letter Date", "type": "date", "required": True},
            {"name": "senderName", "label": "Your Name", "type": "text", "required": True},
            {"name": "recipientName", "label": "Recipient Name", "type": "text", "required": True},
            {"name": "amountOwed", "label": "Amount Owed", "type": "number", "required": True, "minimum": 0},
            {"name": "paymentDeadline", "label": "Payment Deadline", "type": "date", "required": True},
        ],
    },
    {
        "id": 3,
        "template_type": "employment",
        "subcategory": "employment-contract",
        "title": "Employment Contract",
        "description": "Offer of indefinite-term employment.",
        "language": "en",
        "jurisdiction": "Canada",
        "template_content": (
            "EMPLOYMENT CONTRACT\n\n"
            "[COMPANY NAME] (the \"Employer\") offers <employeeName> (the \"Employee\") "
            "the position of [POSITION], starting on [COMMENCEMENT DATE].\n\n"
            "The Employee will receive an annual salary of [SALARY], payable in "
            "accordance with the Employer's regular payroll practices.\n\n"
            "Duties: {{duties}}\n"
        ),
        "fields": [
            {"name": "employerName", "label": "Employer Name", "type": "text", "required": True},
            {"name": "employeeName", "label": "Employee Name", "type": "text", "required": True},
            {"name": "jobTitle", "label": "Job Title", "type": "text", "required": True, "maxLength": 120},
            {"name": "startDate", "label": "Start Date", "type": "date", "required": True},
            {"name": "annualSalary", "label": "Annual Salary", "type": "number", "minimum": 0},
            {"name": "duties", "label": "Duties", "type": "textarea", "rows": 6},
        ],
    },
]
