"""
seed.py — the hardcoded directory shipped with the app.

Served by the directory when Supabase is unconfigured or unreachable, and
upserted into a fresh project by `appylink seed`.
"""

from __future__ import annotations

from typing import Any, Final

from appylink_shared.models import Category, Provider

SEED_CATEGORY_ROWS: Final[list[dict[str, Any]]] = [
    {"id": "software", "label": "Moving Software & CRM", "sort_order": 1},
    {"id": "sales", "label": "Sales Solutions", "sort_order": 2},
    {"id": "insurance", "label": "Insurance", "sort_order": 3},
    {"id": "equipment", "label": "Equipment & Supplies", "sort_order": 4},
    {"id": "marketing", "label": "Marketing", "sort_order": 5},
]

SEED_PROVIDER_ROWS: Final[list[dict[str, Any]]] = [
    {
        "id": "moveman",
        "name": "MoveMan",
        "category_id": "software",
        "tags": ["crm", "quoting", "storage"],
        "website": "https://www.movemanpro.com",
        "summary": "UK removals CRM for quoting, planning and storage.",
        "details": "Surveys, quotes, job planning and storage billing in one system built for removals firms.",
        "discount": {"label": "10% off first year", "details": "Quote Appy Link when booking a demo."},
        "is_featured": True,
        "tier": "featured",
    },
    {
        "id": "moneypenny",
        "name": "Moneypenny",
        "category_id": "sales",
        "tags": ["call answering", "live chat"],
        "website": "https://www.moneypenny.com/uk",
        "summary": "Call answering & live chat for removals firms.",
        "details": "UK-based receptionists capture enquiries around the clock so no move request is missed.",
        "discount": None,
        "is_featured": True,
        "tier": "sponsor",
    },
    {
        "id": "basil-fry",
        "name": "Basil Fry & Company",
        "category_id": "insurance",
        "tags": ["goods in transit", "storage", "liability"],
        "website": "https://basilfry.co.uk",
        "summary": "Specialist insurance for removals & storage.",
        "details": "Goods in transit, warehouse and liability cover arranged by brokers who only insure movers.",
        "discount": None,
        "is_featured": True,
        "tier": "featured",
    },
    {
        "id": "removals-index",
        "name": "Removals Index",
        "category_id": "marketing",
        "tags": ["leads", "reviews"],
        "website": "https://www.removalsindex.com",
        "summary": "Moving leads and customer reviews.",
        "details": "Receive pre-qualified removal enquiries in your area and collect verified reviews.",
        "discount": {"label": "Free trial month", "details": None},
    },
    {
        "id": "packaging-direct",
        "name": "Packaging Direct",
        "category_id": "equipment",
        "tags": ["boxes", "packing materials"],
        "website": "https://www.example-packaging.co.uk",
        "summary": "Boxes, tape and wrap delivered next day.",
        "details": "Trade pricing on double-wall cartons, wardrobe boxes, bubble wrap and furniture covers.",
        "discount": {"label": "5% trade discount", "details": "Applied to orders over £250."},
    },
    {
        "id": "van-hire-pro",
        "name": "Van Hire Pro",
        "category_id": "equipment",
        "tags": ["vans", "fleet"],
        "website": "https://www.example-vanhire.co.uk",
        "summary": "Luton and 7.5t vehicle hire for peak season.",
        "details": "Short and long term hire with tail lifts, straps and blankets included.",
        "discount": None,
    },
    {
        "id": "surveyor-app",
        "name": "Surveyor App",
        "category_id": "software",
        "tags": ["surveys", "quoting", "mobile"],
        "website": "https://www.example-surveyor.app",
        "summary": "Video and in-home surveys on a tablet.",
        "details": "Room-by-room inventories with volume calculation that export straight into your quote.",
        "discount": None,
    },
    {
        "id": "mover-marketing",
        "name": "Mover Marketing Co",
        "category_id": "marketing",
        "tags": ["seo", "ppc", "websites"],
        "website": "https://www.example-movermarketing.co.uk",
        "summary": "Websites and search campaigns for removal companies.",
        "details": "Local SEO, paid search and conversion-focused websites for removals and storage businesses.",
        "discount": {"label": "Free site audit", "details": None},
    },
]

SEED_CATEGORIES: Final[list[Category]] = [Category.from_db_row(r) for r in SEED_CATEGORY_ROWS]
SEED_PROVIDERS: Final[list[Provider]] = [Provider.from_db_row(r) for r in SEED_PROVIDER_ROWS]
