"""
Tests for the classification engine

Tests:
- Keyword and error-code matching
- Rule precedence within a category
- Category fallbacks
- Unknown categories
"""
import pytest

from intake_gateway.models.classification import ClassificationRule, Resource
from intake_gateway.services.classification import UNCLASSIFIED_TOPIC, classify
from intake_gateway.services.classification_rules import (
    CATEGORIES,
    CLASSIFICATION_RULES,
    GOOGLE_WORKSPACE_ACCOUNT_ACCESS,
    HUBSPOT_EMAIL,
    HUBSPOT_LIFECYCLE,
    INTEGRATIONS_AUTOMATION,
    OTHER,
)


class TestKeywordMatching:

    def test_keyword_in_short_description(self):
        result = classify(GOOGLE_WORKSPACE_ACCOUNT_ACCESS, "Forgot my password")

        assert result.topic == "Google Workspace Account Access"
        assert len(result.resources) == 4

    def test_keyword_in_detailed_description(self):
        result = classify(HUBSPOT_EMAIL, "Newsletter problem", "Several messages hit SPAM folders")
        assert result.topic == "HubSpot Email Deliverability"

    def test_matching_is_case_insensitive(self):
        result = classify(GOOGLE_WORKSPACE_ACCOUNT_ACCESS, "ACCOUNT LOCKED")
        assert result.topic == "Google Workspace Account Access"

    def test_multi_word_keyword(self):
        result = classify(HUBSPOT_LIFECYCLE, "Contacts stuck at the wrong deal stage")
        assert result.topic == "HubSpot Lifecycle & Automation"


class TestErrorCodeMatching:

    def test_error_code_alone_is_sufficient(self):
        result = classify(HUBSPOT_LIFECYCLE, "Something odd happened", error_code="hs-wf-0042")
        assert result.topic == "HubSpot Lifecycle & Automation"

    def test_error_code_substring(self):
        result = classify(HUBSPOT_EMAIL, "Problem", error_code="550 5.7.1 rejected")
        assert result.topic == "HubSpot Email Deliverability"

    def test_error_code_ignored_without_patterns(self):
        """Categories without error-code patterns fall back when text does not match"""
        result = classify(GOOGLE_WORKSPACE_ACCOUNT_ACCESS, "Question", error_code="password")
        assert result.topic == "General Google Workspace Account Access Support"


class TestPrecedence:

    def test_first_matching_rule_wins(self):
        """Text matching both the Zapier and the error rules picks the Zapier rule"""
        result = classify(INTEGRATIONS_AUTOMATION, "Zapier trigger failed with timeout")
        assert result.topic == "Integrations Automation (Zapier / Make)"

    def test_later_rule_when_earlier_misses(self):
        result = classify(INTEGRATIONS_AUTOMATION, "Webhook never fires")
        assert result.topic == "Integration Setup & Configuration"

    def test_third_rule(self):
        result = classify(INTEGRATIONS_AUTOMATION, "Authentication failed")
        assert result.topic == "Integration Errors"

    def test_custom_rule_order(self):
        doc = Resource(type="doc", label="Doc", url="https://docs.example.com/doc")
        rules = (
            ClassificationRule(category="Custom", keywords=("alpha",), topic="First", resources=(doc,)),
            ClassificationRule(category="Custom", keywords=("alpha", "beta"), topic="Second"),
            ClassificationRule(category="Custom", topic="Fallback"),
        )

        assert classify("Custom", "alpha beta", rules=rules).topic == "First"
        assert classify("Custom", "beta", rules=rules).topic == "Second"
        assert classify("Custom", "gamma", rules=rules).topic == "Fallback"


class TestFallbacks:

    def test_fallback_when_nothing_matches(self):
        result = classify(INTEGRATIONS_AUTOMATION, "Question about billing")

        assert result.topic == "General Integration Automation Support"
        assert [r.label for r in result.resources] == ["Integration Automation Documentation"]

    def test_other_category_uses_fallback(self):
        result = classify(OTHER, "Anything at all")

        assert result.topic == "General Support"
        assert result.resources[0].label == "General Support Documentation"

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_known_category_never_unclassified(self, category):
        result = classify(category, "zzz qqq")
        assert result.topic != UNCLASSIFIED_TOPIC

    def test_every_category_has_one_fallback(self):
        for category in CATEGORIES:
            fallbacks = [r for r in CLASSIFICATION_RULES if r.category == category and r.is_fallback]
            assert len(fallbacks) == 1, category


class TestUnknownCategory:

    def test_unknown_category_is_unclassified(self):
        result = classify("Not A Category", "password reset")

        assert result.topic == UNCLASSIFIED_TOPIC
        assert result.resources == ()

    def test_category_match_is_exact(self):
        result = classify(GOOGLE_WORKSPACE_ACCOUNT_ACCESS.lower(), "password")
        assert result.topic == UNCLASSIFIED_TOPIC


class TestRuleTable:

    def test_rules_are_frozen(self):
        with pytest.raises(Exception):
            CLASSIFICATION_RULES[0].topic = "Changed"

    def test_resource_type_serializes_as_string(self):
        result = classify(GOOGLE_WORKSPACE_ACCOUNT_ACCESS, "login")
        assert {r.type for r in result.resources} == {"doc", "video"}
