"""
Contacts Search Provider - Searches the address book via the "c" prefix.

The provider does not read contacts itself. The host application passes
a lookup callable (query -> list[Contact]) and a permission check. When
the permission is missing, a single permission-request result is
returned so the UI can ask for it.
"""

from dataclasses import dataclass, field
from typing import Callable

from ..registry import ProviderDefinition
from ..router import ResultItem, SearchProvider

CONTACTS_PERMISSION = "android.permission.READ_CONTACTS"

CONTACTS_DEFINITION = ProviderDefinition(
    provider_id="contacts",
    name="Contacts",
    prefix="c",
    description="Search your contacts",
    icon="x-office-address-book",
    color="#34A853",
)


@dataclass(frozen=True)
class Contact:
    contact_id: int
    display_name: str
    phone_numbers: tuple[str, ...] = field(default=())
    emails: tuple[str, ...] = field(default=())
    lookup_key: str = ""


class ContactsSearchProvider(SearchProvider):
    """Look up contacts through a host-supplied callable."""

    def __init__(self, lookup: Callable[[str], list[Contact]],
                 has_permission: Callable[[], bool] = lambda: True):
        self.lookup = lookup
        self.has_permission = has_permission

    @property
    def definition(self) -> ProviderDefinition:
        return CONTACTS_DEFINITION

    def search(self, query: str) -> list[ResultItem]:
        if not self.has_permission():
            return [ResultItem(
                title="Contacts permission required to search contacts",
                description="Grant Permission",
                icon="dialog-password",
                result_type="permission",
                item=CONTACTS_PERMISSION,
            )]

        term = query.strip()
        if not term:
            return [ResultItem(
                title="Type to search contacts",
                icon=CONTACTS_DEFINITION.icon,
                result_type="hint",
            )]

        contacts = self.lookup(term)
        if not contacts:
            return [ResultItem(
                title=f'No contacts found for "{term}"',
                icon="dialog-question",
                result_type="hint",
            )]

        return [self._contact_to_result(contact) for contact in contacts]

    def _contact_to_result(self, contact: Contact) -> ResultItem:
        if contact.phone_numbers:
            description = contact.phone_numbers[0]
        elif contact.emails:
            description = contact.emails[0]
        else:
            description = ""

        return ResultItem(
            title=contact.display_name,
            description=description,
            icon="avatar-default",
            result_type="contact",
            item=contact,
        )
