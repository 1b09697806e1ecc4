"""Already-resolved localized message handed to the error renderer."""

from __future__ import annotations

from pydantic import Field

from werror.constants import DEFAULT_LEFT_DELIM, DEFAULT_RIGHT_DELIM
from werror.schema.base import TypedBaseModel
from werror.utilities.final import final_class


@final_class
class LocaleMessage(TypedBaseModel):
    """A message identifier paired with its template text for one locale.

    ``id`` becomes the code of errors rendered from this message (unless it is
    blank) and ``other`` holds the template text. Locale selection and plural
    forms are resolved before a message reaches this library.
    """

    id: str = Field("", description="Message identifier, reused as error code")
    other: str = Field("", description="Template text of the message")
    description: str = Field("", description="Note for translators")
    left_delim: str = Field(
        DEFAULT_LEFT_DELIM, description="Opening delimiter of template actions"
    )
    right_delim: str = Field(
        DEFAULT_RIGHT_DELIM, description="Closing delimiter of template actions"
    )

    @property
    def is_templated(self) -> bool:
        """Whether ``other`` contains an action opening delimiter."""
        return (self.left_delim or DEFAULT_LEFT_DELIM) in self.other
