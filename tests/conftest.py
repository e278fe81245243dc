"""Shared fixtures for the SiteGate test suite."""

import json
import re

import pytest

from sitegate.schemas.build_state import PHASE_IDS

REAL_IMAGE = b"\xff\xd8" + b"\x00" * 4096
STUB_IMAGE = b"0123456789"  # 10 bytes

SITE_CONFIG_TS = """\
export const siteConfig: SiteConfig = {
  name: "Acme Paving",
  tagline: "Driveways that last",
  phone: "082 555 0199",
  email: "info@acmepaving.co.za",
  url: "https://acmepaving.co.za",
  theme: {
    primary: "#1F2937",
    displayFont: "Montserrat",
    bodyFont: "Merriweather",
  },
  services: [
    {
      title: "Paving & Landscaping",
      slug: "paving-landscaping",
    },
  ],
};
"""


_FAQ = {"question": "How long does a driveway take?", "answer": "Most driveways take three to five days."}

FULL_SITE_CONFIG = {
    "name": "Acme Paving",
    "tagline": "Driveways that last",
    "description": "Paving and landscaping across Gauteng since 2009.",
    "foundingYear": "2009",
    "founder": "Thabo Mokoena",
    "url": "https://acmepaving.co.za",
    "phone": "082 555 0199",
    "phoneRaw": "0825550199",
    "whatsapp": "27825550199",
    "email": "info@acmepaving.co.za",
    "address": {
        "street": "14 Main Reef Road",
        "city": "Johannesburg",
        "region": "Gauteng",
        "postalCode": "2001",
        "country": "ZA",
        "coords": {"lat": -26.2, "lng": 28.04},
    },
    "theme": {
        "primary": "#1F2937",
        "primaryLight": "#374151",
        "accent": "#F59E0B",
        "accentLight": "#FCD34D",
        "background": "#FFFFFF",
        "surface": "#F9FAFB",
        "text": "#111827",
        "muted": "#6B7280",
        "displayFont": "Montserrat",
        "bodyFont": "Merriweather",
    },
    "nav": [
        {"label": "Home", "href": "/"},
        {"label": "Services", "href": "/services/"},
        {"label": "Contact", "href": "/contact/"},
    ],
    "badges": [{"icon": "shield", "label": "Fully insured"}],
    "services": [
        {
            "title": "Paving and Landscaping",
            "slug": "paving-landscaping",
            "description": "Driveways, patios and garden paths.",
            "shortDescription": "Driveways and patios",
            "features": ["Brick paving"],
            "faqs": [_FAQ],
            "heroSubtitle": "Paving built to last",
            "longDescription": "We lay interlocking brick paving for homes and businesses.",
            "whatWeCover": [{"title": "Driveways", "description": "New and relaid driveways"}],
            "whyChooseUs": [{"bold": "Local", "text": "Family owned since 2009"}],
        }
    ],
    "homepage": {
        "title": "Home",
        "metaTitle": "Acme Paving | Johannesburg Paving",
        "metaDescription": "Brick paving, driveways and landscaping across Johannesburg from a family business.",
        "heroTitle": "Paving that lasts for decades",
        "heroSubtitle": "Driveways, patios and gardens",
        "whyChooseTitle": "Why Acme",
        "whyChooseSubtitle": "Three reasons",
        "whyChooseCards": [
            {"icon": "star", "title": "Quality", "description": "Materials that last decades"},
            {"icon": "clock", "title": "On time", "description": "We finish when we say we will"},
            {"icon": "tag", "title": "Fair prices", "description": "Written quotes with no surprises"},
        ],
        "faqs": [_FAQ],
    },
    "about": {
        "metaTitle": "About Acme Paving",
        "metaDescription": "Family owned paving contractor based in Johannesburg.",
        "heroTitle": "About us",
        "heroSubtitle": "Our story",
        "heading": "Who we are",
        "paragraphs": ["We have paved Gauteng driveways since 2009."],
        "badge": "Since 2009",
        "stats": [{"value": "500+", "label": "Driveways"}, {"value": "15", "label": "Years"}],
    },
    "contact": {
        "metaTitle": "Contact Acme Paving",
        "metaDescription": "Call or message us for a free paving quote today.",
        "heroTitle": "Contact",
        "heroSubtitle": "Free quotes",
        "hours": {
            "standard": {"label": "Office", "days": "Mon to Fri", "hours": "7am to 5pm"},
            "emergency": {"label": "Emergency", "days": "Weekends", "hours": "On request"},
        },
        "faqs": [_FAQ],
    },
    "reviews": {
        "metaTitle": "Reviews",
        "metaDescription": "What customers say",
        "averageRating": 4.8,
        "totalReviews": 120,
        "sourceSummary": "Google reviews",
        "items": [{"name": "Lerato", "text": "Great work", "rating": 5}],
    },
    "servicesPage": {
        "metaTitle": "Services",
        "metaDescription": "Paving services",
        "heroTitle": "Services",
        "heroSubtitle": "What we do",
    },
    "legal": {"registrations": ["CIDB 1234567"], "servicesList": ["Paving"]},
}


def site_config_ts(data):
    """Render a config dict as a site.config.ts export with bare keys and trailing commas."""
    body = json.dumps(data, indent=2)
    body = re.sub(r'"(\w+)":', r"\1:", body)
    body = re.sub(r"([}\]\"\d])\n", r"\1,\n", body)
    return "import type { SiteConfig } from './types';\n\nexport const site: SiteConfig = " + body + ";\n"


IMAGES_TS = """\
const allImages = import.meta.glob<{ default: ImageMetadata }>(
  './assets/images/**/*.{jpg,jpeg,png,webp,svg,gif}',
  { eager: true }
);
"""


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def state_dict(builder_type="template", completed=PHASE_IDS, **overrides):
    data = {
        "buildId": "acme-paving-001",
        "builderType": builder_type,
        "startedAt": "2026-10-01T08:00:00Z",
        "projectPath": "/tmp/acme",
        "metadata": {"companyName": "Acme Paving"},
        "phases": {
            pid: (
                {"status": "completed", "completedAt": "2026-10-01T09:00:00Z"}
                if pid in completed
                else {"status": "pending"}
            )
            for pid in PHASE_IDS
        },
    }
    data.update(overrides)
    return data


@pytest.fixture
def write_state():
    """Write a build-state.json into a project directory."""

    def _write(project, builder_type="template", completed=PHASE_IDS, **overrides):
        data = state_dict(builder_type, completed, **overrides)
        write(project / "build-state.json", json.dumps(data, indent=2))
        return data

    return _write


def _common_files(project):
    write(project / "BUSINESS-CONTEXT.md", "# Acme Paving\n")
    write(project / "IMAGE-PROMPTS.md", "# Image prompts\n")
    write(project / "src" / "site.config.ts", SITE_CONFIG_TS)
    write(project / "public" / "fonts" / "montserrat-latin-regular.woff2", b"wOF2font")
    write(project / "public" / "fonts" / "merriweather-latin-700.woff2", b"wOF2font")


@pytest.fixture
def template_project(tmp_path, write_state):
    """A template-builder project that passes every prebuild check."""
    project = tmp_path / "acme"
    write_state(project, "template")
    _common_files(project)
    write(project / "src" / "images.ts", IMAGES_TS)

    images = project / "src" / "assets" / "images"
    for folder in ("home-hero", "inner-hero", "gallery"):
        write(images / folder / "photo-1.jpg", REAL_IMAGE)
    for placement in ("card", "hero", "content"):
        write(images / "services" / "paving-landscaping" / placement / "shot.webp", REAL_IMAGE)

    write(
        project / "generated-images-manifest.json",
        json.dumps({
            "model": "fal-ai/nano-banana-pro",
            "promptSource": "IMAGE-PROMPTS.md",
            "images": [{"folder": "home-hero", "file": "photo-1.jpg"}],
        }),
    )
    return project


@pytest.fixture
def image_manifest():
    return {
        "images": {
            "logo": {"path": "public/logo.svg", "source": "client"},
            "favicon": {"path": "public/favicon.png", "source": "generated"},
            "ogImage": {"path": "public/og.jpg", "source": "generated"},
            "heroes": {"home": {"path": "public/heroes/home.jpg", "source": "generated", "alt": "Driveway"}},
            "gallery": [{"path": "public/gallery/1.jpg", "source": "client"}],
        }
    }


@pytest.fixture
def page_registry():
    return {
        "pages": [
            {"path": "/", "title": "Home", "type": "static"},
            {"path": "/services/paving/", "title": "Paving", "type": "service"},
        ],
        "navigation": {"main": [{"name": "Home", "path": "/"}, {"name": "Paving", "path": "/services/paving/"}]},
    }


@pytest.fixture
def custom_project(tmp_path, write_state, image_manifest, page_registry):
    """A custom-builder project that passes every prebuild check."""
    project = tmp_path / "custom"
    write_state(project, "custom")
    _common_files(project)
    write(project / "image-manifest.json", json.dumps(image_manifest))
    write(project / "page-registry.json", json.dumps(page_registry))
    for entry in ("public/logo.svg", "public/favicon.png", "public/og.jpg",
                  "public/heroes/home.jpg", "public/gallery/1.jpg"):
        write(project / entry, REAL_IMAGE)
    return project
