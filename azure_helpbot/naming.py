"""Resource naming helpers."""

from datetime import date
from typing import Optional

DATE_FORMAT = "%d%m%y"
RESOURCE_GROUP_SUFFIX = "-rg"


def concat_strings(*parts: str) -> str:
    """Join the parts with no separator."""
    return "".join(parts)


def current_date_formatted(today: Optional[date] = None) -> str:
    """Return the date as ddmmyy, defaulting to today."""
    return (today or date.today()).strftime(DATE_FORMAT)


def resource_group_name(base_name: str) -> str:
    """Return the resource group name, `<base>-rg`."""
    return concat_strings(base_name, RESOURCE_GROUP_SUFFIX)


def dated_name(base_name: str, today: Optional[date] = None) -> str:
    """Append the ddmmyy date to a base name, with no separator.

    Storage accounts and blob containers both use this, so on a given day the
    container name is the same as the account name.
    """
    return concat_strings(base_name, current_date_formatted(today))
