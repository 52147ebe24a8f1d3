from pathlib import Path
from typing import Optional, Union

from storefront_qa.app.services.accessibility_reporter import AccessibilityReporter

RULES_URL = "https://dequeuniversity.com/rules/axe/4.4"
DEMO_TEST_NAME = "US Cuisinart Guest Air Fryer Checkout - Demo"


def _violation(rule_id, impact, description, help_text, nodes, tags=()):
    return {
        "id": rule_id,
        "impact": impact,
        "tags": list(tags),
        "description": description,
        "help": help_text,
        "helpUrl": f"{RULES_URL}/{rule_id}",
        "nodes": [
            {"impact": impact, "html": html, "target": [target], "failureSummary": summary}
            for html, target, summary in nodes
        ],
    }


DEMO_FINDINGS = [
    (
        "Home Page",
        [
            _violation(
                "frame-title",
                "serious",
                "Ensures <iframe> and <frame> elements have an accessible name",
                "Frames must have an accessible name",
                [(
                    '<iframe src="https://example.com" style="display:none;"></iframe>',
                    "iframe",
                    "Fix any of the following:\n  Element does not have a title attribute",
                )],
                tags=("cat.text-alternatives", "wcag2a", "wcag241", "wcag412"),
            ),
            _violation(
                "heading-order",
                "moderate",
                "Ensures the order of headings is semantically correct",
                "Heading levels should only increase by one",
                [("<h3>Welcome</h3>", "h3", "Fix any of the following:\n  Heading order invalid")],
                tags=("cat.semantics", "best-practice"),
            ),
            _violation(
                "landmark-unique",
                "moderate",
                "Ensures landmarks are unique",
                "Landmarks should have a unique role or role/label/title (i.e. accessible name) combination",
                [(
                    "<nav></nav>",
                    "nav:nth-child(1)",
                    "Fix any of the following:\n  The landmark must have a unique aria-label, aria-labelledby, or title",
                )],
                tags=("cat.semantics", "best-practice"),
            ),
            _violation(
                "link-name",
                "serious",
                "Ensures links have discernible text",
                "Links must have discernible text",
                [(
                    '<a href="/products"></a>',
                    'a[href="/products"]',
                    "Fix any of the following:\n  Element does not have text that is visible to screen readers",
                )],
                tags=("cat.name-role-value", "wcag2a", "wcag412", "wcag244"),
            ),
        ],
    ),
    (
        "Air Fryers Category Page",
        [
            _violation(
                "aria-prohibited-attr",
                "serious",
                "Ensures ARIA attributes are not prohibited for an element's role",
                "Elements must only use permitted ARIA attributes",
                [
                    (
                        '<div role="button" aria-label="test"></div>',
                        'div[role="button"]',
                        'Fix all of the following:\n  aria-label attribute cannot be used on a div with role="button"',
                    ),
                    (
                        '<span role="button" aria-label="test"></span>',
                        'span[role="button"]',
                        'Fix all of the following:\n  aria-label attribute cannot be used on a span with role="button"',
                    ),
                ],
                tags=("cat.aria", "wcag2a", "wcag412"),
            ),
            _violation(
                "scrollable-region-focusable",
                "serious",
                "Ensures elements that have scrollable content are accessible by keyboard",
                "Scrollable region must have keyboard access",
                [(
                    '<div style="overflow:scroll"></div>',
                    'div[style*="overflow"]',
                    "Fix any of the following:\n  Element should have focusable content",
                )],
                tags=("cat.keyboard", "wcag2a", "wcag211"),
            ),
        ],
    ),
    (
        "Product Details Page",
        [
            _violation(
                "label-title-only",
                "serious",
                "Ensures that every form element has a visible label and is not solely labeled "
                "using hidden labels, or the title or aria-describedby attributes",
                "Form elements should have a visible label",
                [(
                    '<input type="text" title="Quantity">',
                    'input[title="Quantity"]',
                    "Fix all of the following:\n  Form element does not have a visible label",
                )],
                tags=("cat.forms", "best-practice"),
            ),
            _violation(
                "list",
                "serious",
                "Ensures that lists are structured correctly",
                "<ul> and <ol> must only directly contain <li>, <script> or <template> elements",
                [(
                    "<ul><div><li>Item</li></div></ul>",
                    "ul",
                    "Fix all of the following:\n  List element has direct children that are not allowed: div",
                )],
                tags=("cat.structure", "wcag2a", "wcag131"),
            ),
        ],
    ),
    (
        "Payment Form",
        [
            _violation(
                "select-name",
                "critical",
                "Ensures select element has an accessible name",
                "Select element must have an accessible name",
                [
                    (
                        "<select><option>Month</option></select>",
                        "#expirationMonth",
                        "Fix any of the following:\n  Form element does not have an accessible name",
                    ),
                    (
                        "<select><option>Year</option></select>",
                        "#expirationYear",
                        "Fix any of the following:\n  Form element does not have an accessible name",
                    ),
                ],
                tags=("cat.forms", "wcag2a", "wcag412"),
            ),
        ],
    ),
    (
        "Order Confirmation Page",
        [
            _violation(
                "link-name",
                "serious",
                "Ensures links have discernible text",
                "Links must have discernible text",
                [(
                    '<a href="#"></a>',
                    "a",
                    "Fix any of the following:\n  Element does not have text that is visible to screen readers",
                )] * 43,
                tags=("cat.name-role-value", "wcag2a", "wcag412", "wcag244"),
            ),
        ],
    ),
]


def build_demo_reporter(output_dir: Optional[Union[str, Path]] = None) -> AccessibilityReporter:
    reporter = AccessibilityReporter(output_dir=output_dir)
    for page, violations in DEMO_FINDINGS:
        reporter.add_violations(page, violations)
    return reporter


def generate_demo_report(output_dir: Optional[Union[str, Path]] = None) -> Path:
    return build_demo_reporter(output_dir).generate_report(DEMO_TEST_NAME)
