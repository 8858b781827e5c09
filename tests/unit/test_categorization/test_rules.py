from ledger.categorization.rules import (
    CATEGORIES,
    DEFAULT_RULES,
    SAVINGS_TRANSFER,
    UNCATEGORIZED,
    Categorizer,
    CategoryRule,
    categorize,
    is_valid_category,
    savings_transfer_marker,
)


def test_categorize_migros_groceries() -> None:
    assert categorize("MIGROS FILIALE 123", "", "debit") == "Groceries"


def test_categorize_matches_payment_purpose() -> None:
    assert categorize("Debit card payment", "Netflix subscription", "debit") == "Streaming"


def test_categorize_is_case_insensitive() -> None:
    assert categorize("sbb cff ffs zurich hb", None, "debit") == "Public Transport"


def test_categorize_uber_eats_beats_broad_rules() -> None:
    assert categorize("UBER *EATS HELP.UBER.COM", "", "debit") == "Dining Out"


def test_categorize_uber_trip_to_rideshare() -> None:
    assert categorize("UBER *TRIP ZURICH", "", "debit") == "Rideshare"


def test_categorize_google_catch_all_loses_to_google_play() -> None:
    assert categorize("GOOGLE *YouTubePremium", "", "debit") == "Streaming"
    assert categorize("Google Play Store", "", "debit") == "Electronics"


def test_categorize_bare_google_is_streaming() -> None:
    assert categorize("GOOGLE *SERVICES", "", "debit") == "Streaming"


def test_categorize_standing_order_is_rent() -> None:
    assert categorize("Standing order: Miete Wohnung", "", "debit") == "Rent"


def test_categorize_no_match_is_uncategorized() -> None:
    assert categorize("XYZ UNKNOWN MERCHANT", "", "debit") == UNCATEGORIZED


def test_categorize_empty() -> None:
    assert categorize("", "", "debit") == UNCATEGORIZED
    assert categorize(None, None, "debit") == UNCATEGORIZED


def test_credit_is_never_rule_categorized() -> None:
    assert categorize("MIGROS REFUND", "", "credit") == UNCATEGORIZED
    assert categorize("MIGROS REFUND", "", " CREDIT ") == UNCATEGORIZED


def test_savings_transfer_debit() -> None:
    assert (
        categorize("Account transfer: Jane Doe", "", "debit", user_full_name="Jane Doe")
        == SAVINGS_TRANSFER
    )


def test_savings_transfer_credit() -> None:
    assert (
        categorize("", "ACCOUNT TRANSFER: JANE DOE", "credit", user_full_name="jane doe")
        == SAVINGS_TRANSFER
    )


def test_savings_transfer_takes_precedence_over_rules() -> None:
    assert (
        categorize("Account transfer: Jane Doe Migros", "", "debit", user_full_name="Jane Doe")
        == SAVINGS_TRANSFER
    )


def test_savings_transfer_needs_user_name() -> None:
    assert categorize("Account transfer: Jane Doe", "", "debit") == UNCATEGORIZED
    assert categorize("Account transfer: Jane Doe", "", "debit", user_full_name="  ") == UNCATEGORIZED


def test_savings_transfer_other_name_is_not_savings() -> None:
    assert (
        categorize("Account transfer: John Smith", "", "debit", user_full_name="Jane Doe")
        != SAVINGS_TRANSFER
    )


def test_savings_transfer_marker() -> None:
    assert savings_transfer_marker("Jane Doe") == "account transfer: jane doe"
    assert savings_transfer_marker("") is None
    assert savings_transfer_marker(None) is None


def test_rules_are_ordered_by_descending_priority() -> None:
    priorities = [rule.priority for rule in Categorizer().rules]
    assert priorities == sorted(priorities, reverse=True)


def test_equal_priority_keeps_declaration_order() -> None:
    rules = [
        CategoryRule("Groceries", ("SHOP",), 50),
        CategoryRule("Clothing", ("SHOP",), 50),
    ]
    assert Categorizer(rules).categorize("SHOP 1", "", "debit") == "Groceries"


def test_higher_priority_rule_wins_regardless_of_order() -> None:
    rules = [
        CategoryRule("Streaming", ("SPOT",), 10),
        CategoryRule("Fitness", ("SPOT",), 80),
    ]
    assert Categorizer(rules).categorize("SPOTLIGHT", "", "debit") == "Fitness"


def test_custom_rule_set_replaces_defaults() -> None:
    categorizer = Categorizer([CategoryRule("Education", ("LIBRARY",))])
    assert categorizer.categorize("CITY LIBRARY", "", "debit") == "Education"
    assert categorizer.categorize("MIGROS", "", "debit") == UNCATEGORIZED


def test_default_rules_only_use_known_categories() -> None:
    for rule in DEFAULT_RULES:
        assert rule.category in CATEGORIES


def test_is_valid_category() -> None:
    assert is_valid_category("Groceries")
    assert is_valid_category(SAVINGS_TRANSFER)
    assert not is_valid_category("groceries")
    assert not is_valid_category(None)


def test_specific_rule_beats_broad_rule() -> None:
    categorizer = Categorizer(
        [
            CategoryRule("Rideshare", ("UBER",), 50),
            CategoryRule("Dining Out", ("UBER *EATS",), 100),
        ]
    )
    assert categorizer.categorize("UBER *EATS TRIP", "", "debit") == "Dining Out"
