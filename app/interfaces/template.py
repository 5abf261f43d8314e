"""Template resolution interface.

Defines the abstract base class for placeholder resolution strategies.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any


class BaseTemplateResolver(ABC):
    """Abstract base class for placeholder resolution strategies.

    Substitutes field values into a template body. Implementations must
    leave markers with empty or missing values untouched and must not
    raise for unknown or missing fields.
    """

    @abstractmethod
    def resolve(
        self,
        template: str,
        values: Mapping[str, Any],
        template_id: int | str | None = None,
        *,
        fields: Sequence[Any] | None = None,
    ) -> str:
        """Substitute field values into the template.

        Args:
            template: Template body containing placeholder markers.
            values: Field name to user-supplied value.
            template_id: Optional identifier selecting template-specific rules.
            fields: Optional declared fields of the template.

        Returns:
            The substituted document text.

        Raises:
            TypeError: If template is not a string.
        """

    @abstractmethod
    def resolve_with_report(
        self,
        template: str,
        values: Mapping[str, Any],
        template_id: int | str | None = None,
        *,
        fields: Sequence[Any] | None = None,
    ) -> Any:
        """Substitute field values and report replacements and leftovers.

        Returns:
            A ResolutionReport for the call.
        """
