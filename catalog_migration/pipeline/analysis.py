# catalog_migration/pipeline/analysis.py
"""
Parsing-coverage report over raw WooCommerce samples.

Run after --fetch-samples to see which HTML layouts exist in the catalog and
which products the spec extractor still misses.
"""
import re
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from rich.console import Console
from rich.table import Table

from ..parsing import parse_specs

PROBLEM_PREVIEW = 20


@dataclass
class SampleStats:
    total: int = 0
    has_short_description: int = 0
    has_description: int = 0
    has_table: int = 0
    has_center: int = 0          # Light Commercial layout
    no_center: int = 0           # Commercial layout
    sizes_with_colon: int = 0
    sizes_without_colon: int = 0
    html_descriptions: int = 0   # "This ..." sentence found in short_description
    wc_descriptions: int = 0     # separate description field
    missing_size: int = 0
    missing_weight: int = 0
    missing_riders: int = 0
    no_table_no_description: int = 0
    patterns: Counter = field(default_factory=Counter)
    label_variations: Dict[str, Set[str]] = field(default_factory=lambda: defaultdict(set))
    problem_products: List[str] = field(default_factory=list)


def find_labels(html: str) -> List[str]:
    """Text of every <strong> label in the fragment."""
    return [label.strip() for label in re.findall(r"<strong>([^<]+)</strong>", html, re.IGNORECASE)]


def structure_pattern(has_table: bool, has_center: bool, html_description: bool, wc_description: bool) -> str:
    if has_table:
        pattern = "TABLE+CENTER" if has_center else "TABLE-NOCENTER"
        if html_description:
            pattern += "+HTML_DESC"
    else:
        pattern = "NO_TABLE"
    if wc_description:
        pattern += "+WC_DESC"
    return pattern


def analyze_samples(samples: Iterable[Dict]) -> SampleStats:
    stats = SampleStats()

    for data in samples:
        stats.total += 1
        short_desc = data.get("short_description") or ""
        desc = data.get("description") or ""
        name = data.get("name")
        sku = str(data.get("sku") or data.get("id"))

        if short_desc:
            stats.has_short_description += 1
        if desc:
            stats.has_description += 1

        has_table = "<table" in short_desc
        if has_table:
            stats.has_table += 1

        has_center = "<center>" in short_desc
        if has_center:
            stats.has_center += 1
        elif has_table:
            stats.no_center += 1

        for label in find_labels(short_desc):
            stats.label_variations[label].add(sku)

        if "<strong>Sizes:</strong>" in short_desc:
            stats.sizes_with_colon += 1
        if "<strong>Sizes</strong>" in short_desc:
            stats.sizes_without_colon += 1

        specs = parse_specs(short_desc)

        if not specs.size and has_table:
            stats.missing_size += 1
            stats.problem_products.append(f"MISSING SIZE: {name} ({sku})")
        if not specs.weight and not data.get("weight") and has_table:
            stats.missing_weight += 1
            stats.problem_products.append(f"MISSING WEIGHT: {name} ({sku})")
        if not specs.riders and has_table:
            stats.missing_riders += 1

        if specs.clean_description:
            stats.html_descriptions += 1
        if len(desc) > 10:
            stats.wc_descriptions += 1

        if not has_table and not desc:
            stats.no_table_no_description += 1
            stats.problem_products.append(f"NO TABLE/DESC: {name} ({sku})")

        stats.patterns[structure_pattern(has_table, has_center, bool(specs.clean_description), bool(desc))] += 1

    return stats


def render_report(stats: SampleStats, console: Console) -> None:
    summary = Table(title="Summary")
    summary.add_column("Metric")
    summary.add_column("Count", justify="right")
    for metric, value in [
        ("Total products", stats.total),
        ("Has short_description", stats.has_short_description),
        ("Has description field", stats.has_description),
        ("Has table in HTML", stats.has_table),
        ("  With <center> (Light Commercial)", stats.has_center),
        ("  Without <center> (Commercial)", stats.no_center),
        ('Label "Sizes:" (with colon)', stats.sizes_with_colon),
        ('Label "Sizes" (no colon)', stats.sizes_without_colon),
        ("Has description in HTML", stats.html_descriptions),
        ("Has WC description field", stats.wc_descriptions),
        ("Missing size (with table)", stats.missing_size),
        ("Missing weight (no WC weight)", stats.missing_weight),
        ("Missing riders", stats.missing_riders),
        ("No table AND no description", stats.no_table_no_description),
    ]:
        summary.add_row(metric, str(value))
    console.print(summary)

    patterns = Table(title="Structure patterns")
    patterns.add_column("Pattern")
    patterns.add_column("Products", justify="right")
    for pattern, count in stats.patterns.most_common():
        patterns.add_row(pattern, str(count))
    console.print(patterns)

    labels = Table(title="Label variations")
    labels.add_column("Label")
    labels.add_column("Products", justify="right")
    for label, skus in sorted(stats.label_variations.items(), key=lambda item: len(item[1]), reverse=True):
        labels.add_row(label, str(len(skus)))
    console.print(labels)

    if stats.problem_products:
        console.print(f"[bold red]Problem products (first {PROBLEM_PREVIEW}):[/bold red]")
        for problem in stats.problem_products[:PROBLEM_PREVIEW]:
            console.print(f"  {problem}", markup=False)
        remaining = len(stats.problem_products) - PROBLEM_PREVIEW
        if remaining > 0:
            console.print(f"  ... and {remaining} more")
