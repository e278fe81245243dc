"""Schema for the populated ``site`` object in src/site.config.ts.

Only checked once the content phase has filled the template in; the keys are
camelCase in the TypeScript source.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HexColour = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]
Digits = Annotated[str, Field(pattern=r"^\d{9,15}$")]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NavItem(_CamelModel):
    label: str = Field(min_length=1)
    href: str = Field(pattern=r"^/")


class Badge(_CamelModel):
    icon: str = Field(min_length=1)
    label: str = Field(min_length=1)


class Faq(_CamelModel):
    question: str = Field(min_length=10)
    answer: str = Field(min_length=10)


class CoverItem(_CamelModel):
    title: str
    description: str


class ReasonItem(_CamelModel):
    bold: str
    text: str


class Service(_CamelModel):
    title: str = Field(min_length=1)
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9-]+$")
    description: str = Field(min_length=10)
    short_description: str = Field(min_length=5)
    features: list[str] = Field(min_length=1)
    faqs: list[Faq] = Field(min_length=1)
    hero_subtitle: str = Field(min_length=5)
    long_description: str = Field(min_length=20)
    what_we_cover: list[CoverItem] = Field(min_length=1)
    why_choose_us: list[ReasonItem] = Field(min_length=1)


class Coords(_CamelModel):
    lat: float
    lng: float


class Address(_CamelModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=2)
    region: str = Field(min_length=2)
    postal_code: str = Field(min_length=1)
    country: str = Field(pattern=r"^[A-Z]{2}$")
    coords: Coords


class Theme(_CamelModel):
    primary: HexColour
    primary_light: HexColour
    accent: HexColour
    accent_light: HexColour
    background: HexColour
    surface: HexColour
    text: HexColour
    muted: HexColour
    display_font: str = Field(min_length=2)
    body_font: str = Field(min_length=2)
    accent_font: Optional[str] = None


class WhyChooseCard(_CamelModel):
    icon: str
    title: str = Field(min_length=2)
    description: str = Field(min_length=10)


class Homepage(_CamelModel):
    title: str
    meta_title: str = Field(min_length=10, max_length=70)
    meta_description: str = Field(min_length=50, max_length=160)
    hero_title: str = Field(min_length=10)
    hero_subtitle: str = Field(min_length=10)
    why_choose_title: str = Field(min_length=3)
    why_choose_subtitle: str = Field(min_length=5)
    why_choose_cards: list[WhyChooseCard] = Field(min_length=3)
    faqs: list[Faq] = Field(min_length=1)


class Stat(_CamelModel):
    value: str
    label: str


class About(_CamelModel):
    meta_title: str = Field(min_length=10, max_length=70)
    meta_description: str = Field(min_length=30, max_length=160)
    hero_title: str = Field(min_length=3)
    hero_subtitle: str = Field(min_length=5)
    heading: str = Field(min_length=3)
    paragraphs: list[Annotated[str, Field(min_length=20)]] = Field(min_length=1)
    badge: str = Field(min_length=2)
    stats: list[Stat] = Field(min_length=2)


class OpeningHours(_CamelModel):
    label: str
    days: str
    hours: str


class Hours(_CamelModel):
    standard: OpeningHours
    emergency: OpeningHours


class Contact(_CamelModel):
    meta_title: str = Field(min_length=10, max_length=70)
    meta_description: str = Field(min_length=30, max_length=160)
    hero_title: str = Field(min_length=3)
    hero_subtitle: str = Field(min_length=5)
    hours: Hours
    faqs: list[Faq] = Field(min_length=1)


class Review(_CamelModel):
    name: str
    text: str
    rating: float


class Reviews(_CamelModel):
    meta_title: str = Field(min_length=5)
    meta_description: str = Field(min_length=10)
    average_rating: float = Field(ge=0, le=5)
    total_reviews: int = Field(ge=0)
    source_summary: str
    items: list[Review]


class ServicesPage(_CamelModel):
    meta_title: str = Field(min_length=5)
    meta_description: str = Field(min_length=10)
    hero_title: str = Field(min_length=3)
    hero_subtitle: str = Field(min_length=5)


class Legal(_CamelModel):
    registrations: list[str] = Field(min_length=1)
    services_list: list[str] = Field(min_length=1)


class SiteConfig(_CamelModel):
    name: str = Field(min_length=2)
    tagline: str = Field(min_length=3)
    description: str = Field(min_length=10)
    founding_year: str = Field(pattern=r"^\d{4}$")
    founder: str = Field(min_length=2)
    url: str = Field(pattern=r"^https?://\S+$")

    phone: str = Field(min_length=8)
    phone_raw: Digits
    whatsapp: Digits
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

    address: Address
    theme: Theme

    nav: list[NavItem] = Field(min_length=3)
    badges: list[Badge] = Field(min_length=1)
    services: list[Service] = Field(min_length=1, max_length=6)

    homepage: Homepage
    about: About
    contact: Contact
    reviews: Reviews
    services_page: ServicesPage
    legal: Legal
