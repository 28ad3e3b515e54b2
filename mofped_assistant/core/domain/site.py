"""Values distilled from the ministry's public web pages."""

from dataclasses import dataclass


@dataclass
class ScrapedPage:
    """Title and visible text of a fetched page."""

    title: str
    content: str
    url: str
    last_checked: str


@dataclass
class PartialLocationInfo:
    """Whatever an extractor managed to find on a page. All fields optional."""

    address: str | None = None
    hours: str | None = None
    phone: str | None = None
    email: str | None = None

    def is_empty(self) -> bool:
        return not any((self.address, self.hours, self.phone, self.email))


@dataclass
class LocationInfo:
    """Physical address and opening details of the ministry headquarters."""

    address: str
    last_checked: str
    hours: str | None = None
    phone: str | None = None
    email: str | None = None


@dataclass
class ContactInfo:
    """A single contact channel, optionally tied to a department."""

    department: str | None = None
    phone: str | None = None
    email: str | None = None
    hours: str | None = None
