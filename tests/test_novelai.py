import math

import pytest

from sd_prompt_converter.novelai import scan_a, serialize_a
from sd_prompt_converter.segment import Segment, SegmentKind


def run_scan_test(text, expected):
    segments = scan_a(text)
    assert [(s.text, s.weight) for s in segments] == expected


def test_plain_text_passthrough():
    segments = scan_a("tag1, tag2")
    assert segments == [Segment("tag1", 1.0), Segment("tag2", 1.0)]
    assert all(s.kind is SegmentKind.TEXT for s in segments)


def test_base_weight_token_resets_at_double_colon():
    run_scan_test("2::1girl::, sword", [("1girl", 2.0), ("sword", 1.0)])


def test_base_weight_persists_across_commas():
    run_scan_test("1.5::sword, shield::, bow", [("sword", 1.5), ("shield", 1.5), ("bow", 1.0)])


def test_curly_and_square_emphasis():
    run_scan_test("{{tag}}", [("tag", 1.1)])
    run_scan_test("[tag]", [("tag", 0.95)])
    run_scan_test("[[tag]]", [("tag", 0.9)])
    run_scan_test("{tag1, tag2}, tag3", [("tag1", 1.05), ("tag2", 1.05), ("tag3", 1.0)])


def test_brackets_multiply_base_weight():
    run_scan_test("1.5::sword, {shield}::", [("sword", 1.5), ("shield", 1.58)])


def test_weight_token_discards_open_brackets():
    run_scan_test("{{a 2::b", [("a", 1.1), ("b", 2.0)])


def test_negative_depth_after_reset():
    run_scan_test("2::tag}}", [("tag", 2.0)])
    # depth is -2 for whatever follows: 2 * 1.05 ** -2
    run_scan_test("2::tag}}, more", [("tag", 2.0), ("more", 1.81)])


def test_unmatched_closing_brackets_do_not_fail():
    run_scan_test("]tag", [("tag", 1.05)])
    run_scan_test("}tag", [("tag", 0.95)])


def test_negative_weight_token():
    run_scan_test("2::good::, -1::bad::", [("good", 2.0), ("bad", -1.0)])


def test_back_to_back_weight_tokens():
    run_scan_test("2::3::tag", [("tag", 3.0)])
    run_scan_test("::::tag", [("tag", 1.0)])


def test_number_glued_to_word_is_text():
    run_scan_test("2::tag1::", [("tag1", 2.0)])
    run_scan_test("1girl, 2girls", [("1girl", 1.0), ("2girls", 1.0)])
    run_scan_test("1.5::score_9::, score_8_up", [("score_9", 1.5), ("score_8_up", 1.0)])


def test_malformed_weight_literals_reset_to_one():
    run_scan_test("2::a, -::b", [("a", 2.0), ("b", 1.0)])
    run_scan_test("9" * 400 + "::tag", [("tag", 1.0)])


def test_trailing_buffer_is_flushed():
    run_scan_test("0.5::faded", [("faded", 0.5)])


@pytest.mark.parametrize("text", ["", "   ", None, ",,,", "{}[]::"])
def test_empty_input(text):
    assert scan_a(text) == []


def test_extreme_depth_stays_finite():
    segments = scan_a("{" * 20000 + "tag")
    assert len(segments) == 1
    assert math.isfinite(segments[0].weight)


def test_zero_base_weight_stays_zero_at_extreme_depth():
    run_scan_test("0::" + "{" * 20000 + "tag", [("tag", 0.0)])
    run_scan_test("0::" + "]" * 20000 + "tag", [("tag", 0.0)])


def test_serialize_plain_and_weighted():
    segments = [Segment("good", 1.0), Segment("sword", 1.5), Segment("bad", -1.0)]
    assert serialize_a(segments) == "good, 1.5::sword::, -1::bad::"


def test_serialize_skips_empty_content():
    assert serialize_a([Segment("  ", 2.0), Segment("tag", 1.0)]) == "tag"
    assert serialize_a([]) == ""


def test_serialize_then_scan_keeps_weights():
    segments = [Segment("a", 1.5), Segment("b", 1.0), Segment("c", 0.75), Segment("d", -2.0)]
    assert scan_a(serialize_a(segments)) == segments
