"""Hard-coded placeholder mappings for templates with irregular markers.

Some seeded templates use bracket markers that cannot be derived from the
field name (``landlordName`` is written ``[LESSOR]``). Those mappings live
here, keyed by template id.
"""

import logging
from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

FieldOverrides = dict[str, tuple[str, ...]]


DEFAULT_OVERRIDES: dict[str, FieldOverrides] = {
    # Residential lease agreement
    "1": {
        "landlordName": ("LANDLORD NAME", "LESSOR"),
        "tenantName": ("TENANT NAME", "LESSEE"),
        "propertyAddress": ("PROPERTY ADDRESS", "PREMISES"),
        "rentAmount": ("RENT AMOUNT", "MONTHLY RENT"),
        "dueDay": ("DUE DAY", "RENT DUE DATE"),
        "leaseStart": ("START DATE", "COMMENCEMENT DATE"),
        "leaseEnd": ("END DATE", "TERMINATION DATE"),
        "securityDeposit": ("DEPOSIT AMOUNT", "SECURITY DEPOSIT"),
    },
    # Demand letter
    "2": {
        "senderName": ("YOUR NAME", "SENDER"),
        "recipientName": ("RECIPIENT NAME", "RECIPIENT"),
        "amountOwed": ("AMOUNT OWED", "AMOUNT"),
        "paymentDeadline": ("DEADLINE", "PAYMENT DEADLINE"),
    },
    # Employment contract
    "3": {
        "employerName": ("EMPLOYER NAME", "COMPANY NAME"),
        "employeeName": ("EMPLOYEE NAME",),
        "jobTitle": ("POSITION", "JOB TITLE"),
        "annualSalary": ("SALARY", "ANNUAL SALARY"),
        "startDate": ("START DATE", "COMMENCEMENT DATE"),
    },
}


class OverrideTable:
    """Per-template lookup of ``field name -> bracket placeholder names``.

    Template ids are compared as strings so integer database ids and
    string route parameters select the same entry.
    """

    def __init__(self, entries: Mapping[str, Mapping[str, Sequence[str]]] | None = None) -> None:
        self._entries: dict[str, FieldOverrides] = {}
        source = DEFAULT_OVERRIDES if entries is None else entries
        for template_id, mapping in source.items():
            self.register(template_id, mapping)

    def register(self, template_id: int | str, mapping: Mapping[str, Sequence[str] | str]) -> None:
        """Add or replace the overrides for one template."""
        normalized: FieldOverrides = {}
        for field_name, placeholders in mapping.items():
            if isinstance(placeholders, str):
                placeholders = (placeholders,)
            normalized[field_name] = tuple(p.strip("[]") for p in placeholders)
        self._entries[str(template_id)] = normalized
        logger.debug(f"Registered {len(normalized)} override(s) for template {template_id}")

    def lookup(self, template_id: int | str | None) -> FieldOverrides:
        """Return the overrides for a template, or an empty mapping."""
        if template_id is None:
            return {}
        return self._entries.get(str(template_id), {})

    def __contains__(self, template_id: object) -> bool:
        return str(template_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
