"""
Contact extraction for fetched pages.
Extracts email addresses and phone numbers from free text.
"""

import re
import logging
from typing import Dict, Iterable, List

from ..crawler.page_fetcher import FetchedPage


EMAIL_PATTERN = re.compile(r'\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b', re.IGNORECASE)

# Loose on purpose; dates and long IDs match too.
PHONE_PATTERN = re.compile(r'\+?\(?\d[\d\s\-()]{6,}\d')
MIN_PHONE_DIGITS = 8


class ContactSet:
    """Insertion-ordered, de-duplicated emails and phone numbers."""

    def __init__(self, emails: Iterable[str] = (), phones: Iterable[str] = ()):
        # normalized key -> value as first seen
        self._emails: Dict[str, str] = {}
        self._phones: Dict[str, str] = {}
        for email in emails:
            self.add_email(email)
        for phone in phones:
            self.add_phone(phone)

    def add_email(self, email: str):
        email = email.strip()
        if email:
            self._emails.setdefault(email.lower(), email)

    def add_phone(self, phone: str):
        phone = normalize_phone(phone)
        if phone:
            self._phones.setdefault(phone, phone)

    def update(self, other: 'ContactSet'):
        for email in other.emails:
            self.add_email(email)
        for phone in other.phones:
            self.add_phone(phone)

    @property
    def emails(self) -> List[str]:
        return list(self._emails.values())

    @property
    def phones(self) -> List[str]:
        return list(self._phones.values())

    def __len__(self):
        return len(self._emails) + len(self._phones)

    def __eq__(self, other):
        if not isinstance(other, ContactSet):
            return NotImplemented
        return self.emails == other.emails and self.phones == other.phones

    def __repr__(self):
        return f"ContactSet(emails={self.emails!r}, phones={self.phones!r})"


def normalize_phone(phone: str) -> str:
    return re.sub(r'\s+', ' ', phone).strip()


def extract_emails(text: str) -> List[str]:
    return ContactSet(emails=EMAIL_PATTERN.findall(text or '')).emails


def extract_phone_numbers(text: str) -> List[str]:
    phones = []
    for match in PHONE_PATTERN.findall(text or ''):
        if sum(ch.isdigit() for ch in match) >= MIN_PHONE_DIGITS:
            phones.append(match)
    return ContactSet(phones=phones).phones


def extract_contacts(text: str) -> ContactSet:
    """Scan text for email addresses and phone-number-like runs."""
    return ContactSet(emails=extract_emails(text), phones=extract_phone_numbers(text))


class ContactExtractor:
    """Extracts contact information from fetched pages."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract_from_text(self, text: str) -> ContactSet:
        return extract_contacts(text)

    def extract_from_page(self, page: FetchedPage) -> ContactSet:
        """Extract contacts from a page's visible text and its mailto:/tel: links."""
        if page is None:
            return ContactSet()

        contacts = extract_contacts(page.text)
        contacts.update(extract_contacts(' \n '.join(page.contact_hrefs)))

        self.logger.debug(
            f"Extracted {len(contacts.emails)} emails and {len(contacts.phones)} phones from {page.url}"
        )
        return contacts
