from catalog_migration.parsing.spec_extractor import (
    VALUE_PATTERNS,
    clean_value,
    extract_description,
    extract_table_value,
    parse_count,
    parse_decimal,
    parse_digits,
    parse_specs,
)

from conftest import ART_PANEL_HTML, BLOWER_HTML, COMMERCIAL_HTML, LIGHT_COMMERCIAL_HTML


def test_colored_span_model_number():
    html = '<strong>Model #:</strong></td><td><span style="color:#003366">AB-123</span>'
    assert parse_specs(html).model_number == "AB-123"


def test_item_number_with_bold_tag_and_plain_span():
    html = "<b>Item #</b></td><td><span>XY-9</span></td>"
    assert parse_specs(html).model_number == "XY-9"


def test_weight_drops_unit_suffix():
    html = "<strong>Weight (lbs):</strong></td><td><span>45.5 lbs</span></td>"
    assert parse_specs(html).weight == 45.5


def test_indoor_yes_outdoor_no():
    html = (
        "<strong>Indoor:</strong></td><td><span>Yes</span></td>"
        "<strong>Outdoor:</strong></td><td><span>No</span></td>"
    )
    specs = parse_specs(html)
    assert specs.indoor is True
    assert specs.outdoor is False


def test_indoor_outdoor_absent_when_not_listed():
    specs = parse_specs(ART_PANEL_HTML)
    assert specs.indoor is None
    assert specs.outdoor is None


def test_boolean_is_case_insensitive_and_anything_else_is_false():
    html = (
        "<strong>Indoor:</strong></td><td><span>YES</span></td>"
        "<strong>Outdoor:</strong></td><td><span>N/A</span></td>"
    )
    specs = parse_specs(html)
    assert specs.indoor is True
    assert specs.outdoor is False


def test_size_synthesized_from_length_and_height():
    specs = parse_specs(ART_PANEL_HTML)
    assert specs.size == "20ft L x 12ft H"
    assert specs.model_number == "AP-12"


def test_size_from_length_alone():
    html = "<b>Length:</b></td><td><span>20ft</span></td>"
    assert parse_specs(html).size == "20ft"


def test_size_from_height_alone():
    html = "<b>Height</b></td><td><span>9ft</span></td>"
    assert parse_specs(html).size == "9ft"


def test_commercial_layout():
    specs = parse_specs(COMMERCIAL_HTML)
    assert specs.model_number == "303-75-1"
    assert specs.size == "18' L x 15' W x 16' H"
    assert specs.weight == 245
    assert specs.riders == "6-8"
    assert specs.pieces == 1
    assert specs.blowers == 1
    assert specs.operators == 1
    assert specs.indoor is True
    assert specs.outdoor is False
    assert specs.warranty == "3 Years"
    assert specs.clean_description == "This light commercial palm bounce house features durable vinyl."


def test_light_commercial_layout_without_colons_uses_players():
    specs = parse_specs(LIGHT_COMMERCIAL_HTML)
    assert specs.size == "14' x 14'"
    assert specs.riders == "4"
    assert specs.model_number is None


def test_blower_nameplate():
    specs = parse_specs(BLOWER_HTML)
    assert specs.model_number == "B-150"
    assert specs.power == "1.5 HP"
    assert specs.voltage == "115 V"
    assert specs.frequency == "60 HZ"
    assert specs.phase == "Single"
    assert specs.rpm == 3350
    assert specs.amps == 7.5


def test_colored_span_wins_over_earlier_plain_span():
    html = (
        '<strong>Model #</strong></td><td><span style="font-weight: bold">Ref</span>'
        '<span style="color: #003366">REAL-1</span></td>'
    )
    assert parse_specs(html).model_number == "REAL-1"


def test_strong_label_wins_over_bold_label():
    html = (
        '<b>Model #</b></td><td><span style="color: #003366">B-1</span></td>'
        "<strong>Model #</strong></td><td><span>S-1</span></td>"
    )
    assert extract_table_value(html, "Model #") == "S-1"


def test_bare_cell_fallback():
    html = "<strong>Warranty:</strong></td><td> 2 Years </td>"
    assert parse_specs(html).warranty == "2 Years"


def test_pattern_order():
    assert [name for name, _ in VALUE_PATTERNS] == [
        "strong_colored_span",
        "strong_any_span",
        "bold_colored_span",
        "bold_any_span",
        "bare_cell",
    ]


def test_unparseable_numbers_are_omitted():
    html = (
        "<strong>Pieces:</strong></td><td><span>N/A</span></td>"
        "<strong>Weight (lbs):</strong></td><td><span>TBD</span></td>"
        "<strong>R.P.M.:</strong></td><td><span>varies</span></td>"
    )
    specs = parse_specs(html)
    assert specs.pieces is None
    assert specs.weight is None
    assert specs.rpm is None


def test_empty_and_unrelated_input():
    assert parse_specs("").is_empty()
    assert parse_specs(None).is_empty()
    assert parse_specs("<p>Call us for pricing!</p>").is_empty()


def test_idempotent():
    assert parse_specs(COMMERCIAL_HTML) == parse_specs(COMMERCIAL_HTML)
    assert parse_specs(COMMERCIAL_HTML).to_dict() == parse_specs(COMMERCIAL_HTML).to_dict()


def test_to_dict_only_has_found_fields():
    assert parse_specs(ART_PANEL_HTML).to_dict() == {"model_number": "AP-12", "size": "20ft L x 12ft H"}


def test_description_requires_this_prefix():
    html = '<span style="font-size: medium;">Our commercial slide is a crowd pleaser.</span>'
    assert extract_description(html) is None


def test_description_requires_keyword():
    html = '<span style="font-size: medium;">This is a great product.</span>'
    assert extract_description(html) is None


def test_description_decodes_entities():
    html = '<span style="font-size:medium">This 18&#8242; inflatable   is fun.</span>'
    assert extract_description(html) == "This 18' inflatable is fun."


def test_clean_value():
    assert clean_value("  10&#8243; &amp; 12&#8243;&nbsp;tall ") == '10" & 12" tall'


def test_numeric_parsers():
    assert parse_decimal("45.5 lbs") == 45.5
    assert parse_decimal("1.2.3") == 1.2
    assert parse_decimal("none") is None
    assert parse_count("3 pieces") == 3
    assert parse_count("N/A") is None
    assert parse_digits("3,350 RPM") == 3350
    assert parse_digits("") is None
