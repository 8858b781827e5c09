"""Deterministic, rule-based transaction categorization.

ZKB statements carry no merchant category, so a category is inferred from
the booking text and payment purpose. Rules are plain case-insensitive
substring patterns ranked by priority: narrow patterns (``UBER *EATS``)
get a higher priority than broad catch-alls (``GOOGLE``) so they win.

Credits are never rule-categorized. The only exception is the savings
transfer check, which looks for ``"account transfer: <holder name>"`` and
applies to both directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

SAVINGS_TRANSFER = "Savings Transfer"
UNCATEGORIZED = "Uncategorized"

# Fixed category set, in display order.
CATEGORIES: tuple[str, ...] = (
    # Essential/fixed costs
    "Rent",
    "Health Insurance",
    "Mobile & Internet",
    "Bank Fees",
    # Daily living
    "Groceries",
    "Dining Out",
    "Cash Withdrawal",
    # Transportation
    "Public Transport",
    "Rideshare",
    "Travel",
    # Shopping
    "Electronics",
    "Home & Furnishing",
    "Clothing",
    "Online Shopping",
    # Entertainment & subscriptions
    "Streaming",
    "Gaming",
    "AI Tools",
    # Health & wellness
    "Medical & Pharmacy",
    "Fitness",
    "Personal Care",
    # Other
    "Education",
    "Insurance",
    SAVINGS_TRANSFER,
    UNCATEGORIZED,
)


@dataclass(frozen=True)
class CategoryRule:
    category: str
    patterns: tuple[str, ...]
    priority: int = 50


DEFAULT_RULES: tuple[CategoryRule, ...] = (
    # High priority: specific patterns that would otherwise hit a broader rule.
    CategoryRule("Rideshare", ("UBER *TRIP", "UBER  *TRIP", "UBER   *TRIP", "Bolt", "Taxi", "LYFT"), 100),
    CategoryRule("Dining Out", ("UBER *EATS", "UBER  *EATS"), 100),
    CategoryRule("Rent", ("Standing order", "Miete", "ALBEK AMBRA"), 90),
    # Standard priority
    CategoryRule(
        "Health Insurance",
        ("Sanitas", "Helsana", "CSS", "Visana", "Krankenkasse", "Grundversicherung"),
    ),
    CategoryRule(
        "Mobile & Internet",
        ("Swisscom", "SWISSCOM BILLING", "Sunrise", "Salt", "UPC", "Quickline"),
    ),
    CategoryRule(
        "Bank Fees",
        (
            "Payment transaction prices",
            "Interest on amount overdrawn",
            "Interest on credit",
            "Kontoführung",
            "Bankgebühr",
        ),
    ),
    CategoryRule(
        "Groceries",
        (
            "Migros", "Coop", "Denner", "migrolino", "Avec", "Aldi", "Lidl",
            "COOP VITALITY", "CARREFOUR", "MONOPRIX", "k kiosk",
            "Filiale", "SUPERETTE", "Spar", "Volg",
        ),
    ),
    CategoryRule(
        "Dining Out",
        (
            "Lakomka", "SUBWAY", "WANGKHAR", "STARBUCKS", "Seven Stars",
            "Suan Long", "MCDONALDS", "Aroy Food", "VICAFE", "Caffe Spettacolo",
            "Kuni & Gunde", "Miro Bahnhof", "Scent of Bamboo", "K2 Express",
            "Restaurant", "Cafe", "Coffee", "MINIME", "PHIE HALWANI",
            "HIPPY MARKET", "LE COLVERT", "LE LUTECE", "SAPPORO", "GEORGIEN",
            "Oranta", "Walkthrough Level", "Burger King", "KFC", "Pizza",
            "Tamarind Hill", "Rice Up!",
        ),
    ),
    CategoryRule("Cash Withdrawal", ("Withdrawal", "ATM", "Bargeld", "Bargeldbezug")),
    CategoryRule(
        "Public Transport",
        ("SBB CFF FFS", "ZVV", "DB FERNVERKEHR", "Bahn", "VERKEHRSVERBUND", "BLS", "Tram", "Bus AG"),
    ),
    CategoryRule(
        "Travel",
        (
            "HOTEL", "SNCF", "RATP", "MUSEE", "LOUVRE", "Booking", "Airbnb",
            "Flug", "flight", "SWISS INTERNATIONAL AIR", "SERVICE NAVIGO",
            "TICKET", "LOUVRETICKET", "MUSEE ORSAY", "TICKET WEEZEVENT",
            "ORSAY", "TGV", "Eurostar", "Ryanair", "Easyjet",
        ),
    ),
    CategoryRule(
        "Electronics",
        (
            "Interdiscount", "MediaMarkt", "MEDIA MARKT", "mobilezone", "Digitec", "Galaxus",
            "Apple Store", "Apple Zurich", "APPLE.COM/BILL", "Google Play",
        ),
    ),
    CategoryRule(
        "Home & Furnishing",
        ("IKEA", "JUMBO", "Möbel", "Pfister", "Micasa", "Lumimart", "Personenmeldeamt"),
    ),
    CategoryRule(
        "Clothing",
        (
            "H & M", "H&M", "Metro Boutique", "Zara", "C&A", "PKZ",
            "Decathlon", "Dr Martens", "LARRY H", "FJ DIFFUSION", "MON ETOILE",
            "Uniqlo", "Mango", "Reserved", "Snipes", "Foot Locker",
        ),
    ),
    CategoryRule(
        "Online Shopping",
        ("aliexpress", "Alibaba", "Amazon", "AMZN", "eBay", "Wish", "Temu"),
    ),
    CategoryRule(
        "Streaming",
        ("Spotify", "YouTube", "Netflix", "Disney", "HBO", "Twitch", "Crunchyroll"),
    ),
    CategoryRule(
        "Gaming",
        (
            "Steam", "STEAM PURCHASE", "STEAMGAMES", "HoYoverse", "HOYOVERSE",
            "PlayStation", "Xbox", "Nintendo", "Epic Games",
        ),
    ),
    CategoryRule("AI Tools", ("CLAUDE.AI", "ChatGPT", "OpenAI", "Cursor", "Copilot", "Anthropic")),
    CategoryRule(
        "Medical & Pharmacy",
        (
            "ODONTO", "APOTHEKE", "PHARMACIE", "zahnarztzentrum", "STERNEN-APOTHEKE",
            "Dentist", "Zahnarzt", "Arzt", "Praxis", "Klinik", "Spital", "DOUAT",
        ),
    ),
    CategoryRule(
        "Fitness",
        (
            "NonStop Gym", "Gym", "Fitnesscenter", "ACTIV FITNESS", "Migros Fitness",
            "Holmes Place", "Kieser", "Crossfit",
        ),
    ),
    CategoryRule(
        "Personal Care",
        (
            "LUSH", "L.Occitane", "LOccitane", "FADECUT", "Coiffeur", "Haircut",
            "Friseur", "Barber", "Salon", "WAL*LUSH", "WEST FADECUT", "Sephora", "Douglas",
        ),
    ),
    CategoryRule(
        "Education",
        (
            "Preply", "Udemy", "Coursera", "Orell Fussli", "Buchhandlung", "Books",
            "PAPYRIN", "Ex Libris", "Thalia",
        ),
    ),
    CategoryRule(
        "Insurance",
        ("AXA", "Mobiliar", "VERSICHERUNG", "Zurich Insurance", "Allianz", "Generali", "Baloise"),
    ),
    # Low priority catch-alls. A bare GOOGLE charge is most likely YouTube.
    CategoryRule("Streaming", ("GOOGLE",), 20),
)


def is_valid_category(category: str | None) -> bool:
    return category in CATEGORIES


def savings_transfer_marker(user_full_name: str | None) -> str | None:
    """Return the lowercase text that identifies an own-account transfer."""
    if not user_full_name or not user_full_name.strip():
        return None
    return f"account transfer: {user_full_name.lower()}"


class Categorizer:
    """Assign categories from an immutable, priority-ordered rule set.

    Rules are sorted once, highest priority first. The sort is stable, so
    rules of equal priority keep their declaration order.

    Example:
        >>> categorizer = Categorizer()
        >>> categorizer.categorize("MIGROS FILIALE 123", "", "debit")
        'Groceries'
    """

    def __init__(self, rules: Iterable[CategoryRule] = DEFAULT_RULES):
        self._rules: tuple[CategoryRule, ...] = tuple(
            sorted(rules, key=lambda rule: rule.priority, reverse=True)
        )
        # Patterns are matched lowercase; precompute once.
        self._lowered: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
            (rule.category, tuple(p.lower() for p in rule.patterns)) for rule in self._rules
        )

    @property
    def rules(self) -> tuple[CategoryRule, ...]:
        """Rules in evaluation order."""
        return self._rules

    def categorize(
        self,
        booking_text: str | None,
        payment_purpose: str | None,
        transaction_type: str,
        user_full_name: str | None = None,
    ) -> str:
        """Infer a category for one transaction. Never raises.

        Args:
            booking_text: Bank booking text (merchant line).
            payment_purpose: Free-text payment purpose.
            transaction_type: "debit" or "credit".
            user_full_name: Account holder name for savings-transfer detection.

        Returns:
            A category from CATEGORIES; UNCATEGORIZED when nothing matches.
        """
        text = f"{booking_text or ''} {payment_purpose or ''}".lower()

        marker = savings_transfer_marker(user_full_name)
        if marker and marker in text:
            return SAVINGS_TRANSFER

        if (transaction_type or "").strip().lower() == "credit":
            return UNCATEGORIZED

        for category, patterns in self._lowered:
            for pattern in patterns:
                if pattern in text:
                    return category

        return UNCATEGORIZED


default_categorizer = Categorizer()


def categorize(
    booking_text: str | None,
    payment_purpose: str | None,
    transaction_type: str,
    user_full_name: str | None = None,
) -> str:
    """Categorize with the default rule table."""
    return default_categorizer.categorize(
        booking_text, payment_purpose, transaction_type, user_full_name
    )
