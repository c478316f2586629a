# catalog_migration/parsing/spec_extractor.py
"""
Pulls structured product specs out of WooCommerce short_description HTML.

The store's descriptions come in a handful of markup dialects:
  - Light Commercial: <center> wrapper, <strong> labels without colons ("Sizes", "Riders")
  - Commercial: no <center>, <strong> labels with colons ("Sizes:", "Riders:")
  - Art Panels: <b> labels, Length/Height instead of Sizes, "Item #" instead of "Model #"
  - Packages/Accessories: no table at all

Every lookup is a regex over the raw fragment. Nothing here raises; a label
that can't be found just leaves its field as None.
"""
import logging
import re
from functools import lru_cache
from typing import Callable, List, Optional, Tuple

from ..models import ExtractedSpec

logger = logging.getLogger(__name__)

# Value cell layouts, strictest first. The order matters: the looser patterns
# will happily grab the wrong span on layouts the stricter ones handle.
_COLORED_SPAN = r"[\s\S]*?</td>[\s\S]*?<td[^>]*>[\s\S]*?<span[^>]*color:[^>]*#003366[^>]*>([^<]+)</span>"
_ANY_SPAN = r"[\s\S]*?</td>[\s\S]*?<td[^>]*>[\s\S]*?<span[^>]*>([^<]+)</span>"
_BARE_CELL = r"[\s\S]*?</td>[\s\S]*?<td[^>]*>\s*([^<\s][^<]*)\s*</td>"

VALUE_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("strong_colored_span", r"<strong>{label}:?</strong>" + _COLORED_SPAN),
    ("strong_any_span", r"<strong>{label}:?</strong>" + _ANY_SPAN),
    ("bold_colored_span", r"<b>{label}:?</b>" + _COLORED_SPAN),
    ("bold_any_span", r"<b>{label}:?</b>" + _ANY_SPAN),
    ("bare_cell", r"<(?:strong|b)>{label}:?</(?:strong|b)>" + _BARE_CELL),
)

DESCRIPTION_KEYWORDS = (
    "commercial", "inflatable", "bouncer", "slide", "design",
    "feature", "quality", "vinyl", "grade", "durable",
)

_DESCRIPTION_RE = re.compile(
    r"<span[^>]*font-size:\s*medium[^>]*>[\s\S]*?(This[^<]+(?:"
    + "|".join(DESCRIPTION_KEYWORDS)
    + r")[^<]*)</span>",
    re.IGNORECASE,
)

# Entities used in the store's HTML, decoded in this order.
_ENTITIES = (
    ("&#8242;", "'"),   # foot mark
    ("&#8243;", '"'),   # inch mark
    ("&nbsp;", " "),
    ("&amp;", "&"),
)

# (field, labels tried in order). Labels are regex fragments.
TEXT_FIELDS = (
    ("model_number", ("Model #", "Item #")),
    ("warranty", ("Warranty",)),
    ("riders", ("Riders", "Players")),
    ("power", ("Power",)),
    ("voltage", ("Voltage",)),
    ("frequency", ("Frequency",)),
    ("phase", ("Phase",)),
)
COUNT_FIELDS = (
    ("pieces", "Pieces"),
    ("blowers", "Blowers"),
    ("operators", "Operators"),
)
BOOLEAN_FIELDS = (
    ("indoor", "Indoor"),
    ("outdoor", "Outdoor"),
)


def clean_value(value: str) -> str:
    """Trims, decodes the handful of entities the store uses and collapses whitespace."""
    value = value.strip()
    for entity, replacement in _ENTITIES:
        value = value.replace(entity, replacement)
    return re.sub(r"\s+", " ", value)


@lru_cache(maxsize=None)
def value_matchers(label: str) -> List[Tuple[str, Callable[[str], Optional[re.Match]]]]:
    """The ordered (name, search) pairs tried for one label."""
    return [
        (name, re.compile(template.format(label=label), re.IGNORECASE).search)
        for name, template in VALUE_PATTERNS
    ]


def extract_table_value(html: str, label: str) -> Optional[str]:
    """Value of the first pattern that matches `label` with a non-empty result."""
    for name, search in value_matchers(label):
        match = search(html)
        if match and match.group(1):
            value = clean_value(match.group(1))
            if value:
                logger.debug("Matched '%s' with %s: %s", label, name, value)
                return value
    return None


def extract_first_value(html: str, labels: Tuple[str, ...]) -> Optional[str]:
    """Tries each alternate label in turn."""
    for label in labels:
        value = extract_table_value(html, label)
        if value:
            return value
    return None


def extract_size(html: str) -> Optional[str]:
    size = extract_first_value(html, ("Sizes?", "Size"))
    if size:
        return size
    # Art Panels list Length and Height separately.
    length = extract_table_value(html, "Length")
    height = extract_table_value(html, "Height")
    if length and height:
        return f"{length} L x {height} H"
    return length or height


def extract_description(html: str) -> Optional[str]:
    """
    The marketing sentence from a font-size: medium span. Only sentences that
    start with "This" and mention one of DESCRIPTION_KEYWORDS count; anything
    else is left for the caller's stripped-HTML fallback.
    """
    match = _DESCRIPTION_RE.search(html)
    if match and match.group(1):
        return clean_value(match.group(1))
    return None


def parse_decimal(value: str) -> Optional[float]:
    """Keeps digits and dots, then reads the leading number ("45.5 lbs" -> 45.5)."""
    digits = re.sub(r"[^0-9.]", "", value)
    match = re.match(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+", digits)
    return float(match.group()) if match else None


def parse_count(value: str) -> Optional[int]:
    """Leading integer of the value ("3 pieces" -> 3, "N/A" -> None)."""
    match = re.match(r"\s*([+-]?[0-9]+)", value)
    return int(match.group(1)) if match else None


def parse_digits(value: str) -> Optional[int]:
    """All digits in the value joined together ("3,350 RPM" -> 3350)."""
    digits = re.sub(r"[^0-9]", "", value)
    return int(digits) if digits else None


def parse_specs(html: Optional[str]) -> ExtractedSpec:
    """Extracts every spec that can be found in one HTML fragment."""
    specs = ExtractedSpec()
    if not isinstance(html, str) or not html:
        return specs

    for field_name, labels in TEXT_FIELDS:
        setattr(specs, field_name, extract_first_value(html, labels))

    specs.size = extract_size(html)

    # Unit weight from the table, not the WooCommerce shipping weight.
    weight = extract_table_value(html, r"Weight \(lbs\)")
    if weight:
        specs.weight = parse_decimal(weight)

    for field_name, label in COUNT_FIELDS:
        value = extract_table_value(html, label)
        if value:
            setattr(specs, field_name, parse_count(value))

    for field_name, label in BOOLEAN_FIELDS:
        value = extract_table_value(html, label)
        if value:
            setattr(specs, field_name, value.lower() == "yes")

    rpm = extract_table_value(html, r"R\.P\.M\.")
    if rpm:
        specs.rpm = parse_digits(rpm)

    amps = extract_table_value(html, "AMPS")
    if amps:
        specs.amps = parse_decimal(amps)

    specs.clean_description = extract_description(html)
    return specs
