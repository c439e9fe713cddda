"""Type-aware equality for attribute values."""

from __future__ import annotations

from pipedream.domain.model import EntityReference, Money, OptionSetValue


def values_differ(new_value: object, old_value: object) -> bool:
    """Return ``True`` when ``new_value`` and ``old_value`` are different.

    The shape of ``new_value`` decides which rule applies:

    * text: ``None`` and ``""`` are the same (storage does not tell them apart)
    * option sets: compared by numeric code
    * references: compared by record id
    * money: exact decimal comparison
    * anything else: plain ``!=`` between values of the same type; a bool is
      never equal to a number and an int never equal to a float
    """

    if new_value is None and old_value is None:
        return False

    if isinstance(new_value, str) or (new_value is None and isinstance(old_value, str)):
        return _text_differs(new_value, old_value)

    if new_value is None or old_value is None:
        return True

    if isinstance(new_value, OptionSetValue):
        if not isinstance(old_value, OptionSetValue):
            return True
        return new_value.value != old_value.value

    if isinstance(new_value, EntityReference):
        if not isinstance(old_value, EntityReference):
            return True
        return new_value.id != old_value.id

    if isinstance(new_value, Money):
        if not isinstance(old_value, Money):
            return True
        return new_value.value != old_value.value

    if type(new_value) is not type(old_value):
        return True
    return new_value != old_value


def values_equal(new_value: object, old_value: object) -> bool:
    return not values_differ(new_value, old_value)


def _text_differs(new_value: str | None, old_value: object) -> bool:
    if old_value is not None and not isinstance(old_value, str):
        return True
    if not new_value and not old_value:
        return False
    return new_value != old_value
