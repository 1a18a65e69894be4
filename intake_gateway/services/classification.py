"""
Classification engine

Pure function: picks a topic and recommended resources for a request from
the static rule table. No network calls, no filesystem access.
"""
from typing import Optional, Sequence

from intake_gateway.models.classification import ClassificationResult, ClassificationRule
from intake_gateway.services.classification_rules import CLASSIFICATION_RULES

UNCLASSIFIED_TOPIC = "Unclassified / Manual Review"


def _matches(rule: ClassificationRule, text: str, error_code: Optional[str]) -> bool:
    """A rule fires on any keyword in the text or any pattern in the error code"""
    if rule.keywords and any(kw.lower() in text for kw in rule.keywords):
        return True
    if rule.error_codes and error_code:
        return any(pattern.lower() in error_code for pattern in rule.error_codes)
    return False


def classify(
    category: str,
    short_description: str,
    detailed_description: Optional[str] = None,
    error_code: Optional[str] = None,
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES
) -> ClassificationResult:
    """
    Classify a request and recommend resources

    Args:
        category: Category label chosen on the form
        short_description: One-line summary
        detailed_description: Free-text description
        error_code: Error code reported by the client
        rules: Rule table, in precedence order

    Returns:
        ClassificationResult from the first matching rule, the category's
        fallback rule, or the unclassified result
    """
    text = f"{short_description or ''} {detailed_description or ''}".lower()
    code = error_code.lower() if error_code else None

    candidates = [rule for rule in rules if rule.category == category]

    # First pass: keyword or error-code match, declaration order wins
    for rule in candidates:
        if _matches(rule, text, code):
            return ClassificationResult(topic=rule.topic, resources=rule.resources)

    # Second pass: the category's predicate-free fallback
    for rule in candidates:
        if rule.is_fallback:
            return ClassificationResult(topic=rule.topic, resources=rule.resources)

    return ClassificationResult(topic=UNCLASSIFIED_TOPIC, resources=())
