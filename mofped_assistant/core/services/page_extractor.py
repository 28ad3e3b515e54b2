"""Turns visible page text into location and contact fields."""

import re
from abc import ABC, abstractmethod

from ..domain import ContactInfo, PartialLocationInfo

ADDRESS_PATTERNS = [
    re.compile(r"plot\s+\d+[-\s]\d*\s+[^,]+,\s*[^,]+,\s*kampala", re.IGNORECASE),
    re.compile(r"apollo\s+kaggwa\s+road", re.IGNORECASE),
    re.compile(r"ministry\s+of\s+finance[^,]*,\s*[^,]+,\s*kampala", re.IGNORECASE),
    re.compile(r"p\.?o\.?\s*box\s+\d+[^,]*,\s*kampala", re.IGNORECASE),
]

PHONE_PATTERN = re.compile(r"(\+256\s*\d{3}\s*\d{3}\s*\d{3}|\d{3}\s*\d{3}\s*\d{3})")
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
HOURS_PATTERN = re.compile(
    r"(monday|tuesday|wednesday|thursday|friday)[^.]*(?:am|pm)[^.]*(?:am|pm)",
    re.IGNORECASE,
)

# Pages list the same switchboard number in header, footer and body.
MAX_CONTACTS = 6


def _normalize_phone(raw: str) -> str:
    return " ".join(raw.split())


def _unique(values: list[str]) -> list[str]:
    seen: set[str] = set()
    ordered = []
    for value in values:
        key = value.lower()
        if key not in seen:
            seen.add(key)
            ordered.append(value)
    return ordered


class PageExtractor(ABC):
    """Strategy for reading structured fields out of page text."""

    @abstractmethod
    def extract(self, content: str) -> PartialLocationInfo:
        """Location fields found in ``content``; missing fields stay ``None``."""
        ...

    @abstractmethod
    def extract_contacts(self, content: str) -> list[ContactInfo]:
        """Contact channels found in ``content``, deduplicated, in page order."""
        ...


class RegexPageExtractor(PageExtractor):
    """Pattern-based extractor tuned to the ministry's contact pages."""

    def find_address(self, content: str) -> str | None:
        for pattern in ADDRESS_PATTERNS:
            match = pattern.search(content)
            if match:
                return match.group(0).strip()
        return None

    def find_phones(self, content: str) -> list[str]:
        return _unique([_normalize_phone(m) for m in PHONE_PATTERN.findall(content)])

    def find_emails(self, content: str) -> list[str]:
        return _unique(EMAIL_PATTERN.findall(content))

    def find_hours(self, content: str) -> str | None:
        match = HOURS_PATTERN.search(content)
        return match.group(0).strip() if match else None

    def extract(self, content: str) -> PartialLocationInfo:
        if not content:
            return PartialLocationInfo()

        phones = self.find_phones(content)
        emails = self.find_emails(content)
        return PartialLocationInfo(
            address=self.find_address(content),
            hours=self.find_hours(content),
            phone=phones[0] if phones else None,
            email=emails[0] if emails else None,
        )

    def extract_contacts(self, content: str) -> list[ContactInfo]:
        if not content:
            return []

        hours = self.find_hours(content)
        contacts = [ContactInfo(phone=phone, hours=hours) for phone in self.find_phones(content)]
        contacts.extend(ContactInfo(email=email, hours=hours) for email in self.find_emails(content))
        return contacts[:MAX_CONTACTS]
