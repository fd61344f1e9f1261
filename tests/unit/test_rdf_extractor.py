from __future__ import annotations

from fairsharing_report.services.rdf_extractor import (
    RegexRdfExtractor,
    extract_description,
    find_metric_url,
)

DOI = "https://doi.org/10.25504/FAIRsharing.XYZ9"
SITE = "https://fairsharing.org/10.25504/FAIRsharing.ABC1"


class TestFindMetricUrl:
    def test_doi_form(self):
        text = f"<x> <http://purl.org/dc/terms/conformsTo> <{DOI}> ."
        assert find_metric_url(text) == DOI

    def test_doi_form_wins_even_when_site_form_comes_first(self):
        text = f"<{SITE}> comes first\nthen <{DOI}>"
        assert find_metric_url(text) == DOI

    def test_site_form_when_no_doi_form(self):
        assert find_metric_url(f"see {SITE} for details") == SITE

    def test_first_match_of_winning_pattern(self):
        text = f"{DOI}\nhttps://doi.org/10.25504/FAIRsharing.second"
        assert find_metric_url(text) == DOI

    def test_token_stops_at_non_alphanumeric(self):
        text = "<https://doi.org/10.25504/FAIRsharing.a1b2>."
        assert find_metric_url(text) == "https://doi.org/10.25504/FAIRsharing.a1b2"

    def test_absent(self):
        assert find_metric_url("https://doi.org/10.1000/other.thing FAIRsharing") is None
        assert find_metric_url("") is None


class TestExtractDescription:
    def test_ntriples_predicate(self):
        text = '<https://example.org/t1> <http://purl.org/dc/terms/description> "A test." .'
        assert extract_description(text) == "A test."

    def test_quoted_dcterms_element(self):
        text = '<dcterms:description>"Quoted in XML"</dcterms:description>'
        assert extract_description(text) == "Quoted in XML"

    def test_multiline_element_with_markup_stripped(self):
        text = (
            '<dcterms:description xml:lang="en">\n'
            "  Checks that <b>metadata</b> is\n  resolvable.\n"
            "</dcterms:description>"
        )
        assert extract_description(text) == "Checks that metadata is\n  resolvable."

    def test_turtle_prefixed_name(self):
        text = '<#test> dcterms:description "Turtle style" ;\n  dcterms:title "T" .'
        assert extract_description(text) == "Turtle style"

    def test_result_is_trimmed(self):
        text = '<http://purl.org/dc/terms/description>   "  padded  "'
        assert extract_description(text) == "padded"

    def test_primary_pattern_beats_later_patterns(self):
        text = (
            'dcterms:description "from turtle"\n'
            '<dcterms:description>"from xml"</dcterms:description>\n'
            '<x> <http://purl.org/dc/terms/description> "from ntriples" .'
        )
        assert extract_description(text) == "from ntriples"

    def test_quoted_element_beats_unquoted_element(self):
        text = (
            "<dcterms:description>plain</dcterms:description>\n"
            '<dcterms:description>"quoted"</dcterms:description>'
        )
        assert extract_description(text) == "quoted"

    def test_blank_capture_falls_through_to_next_pattern(self):
        text = (
            '<x> <http://purl.org/dc/terms/description> "" .\n'
            'dcterms:description "fallback"'
        )
        assert extract_description(text) == "fallback"

    def test_absent(self):
        assert extract_description("<x> <http://purl.org/dc/terms/title> \"T\" .") is None


def test_regex_extractor_delegates():
    extractor = RegexRdfExtractor()
    text = f'<http://purl.org/dc/terms/description> "D" <{DOI}>'
    assert extractor.find_metric_url(text) == DOI
    assert extractor.extract_description(text) == "D"
