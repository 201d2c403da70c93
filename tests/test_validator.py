"""Tests for line splitting and checksum validation."""
import string

import pytest
from hypothesis import given, strategies as st

from teleinfo_exporter.teleinfo import (
    ChecksumMismatchError,
    FrameValidationError,
    LineValidator,
    MalformedLineError,
    compute_checksum,
)
from teleinfo_exporter.teleinfo.validator import split_line
from teleinfo_frames import SAMPLE_FRAME, build_frame, build_line

labels = st.text(alphabet=string.ascii_uppercase + string.digits, min_size=1, max_size=8)
values = st.text(alphabet=string.ascii_uppercase + string.digits + ".", min_size=1, max_size=12)
# Printable characters that can replace a checksum without changing the line shape
checksum_chars = st.sampled_from([chr(c) for c in range(0x21, 0x7F)])


def test_validate_reference_frame():
    mapping = LineValidator().validate(SAMPLE_FRAME)

    assert mapping == {
        "ADCO": "031762270346",
        "OPTARIF": "BASE",
        "ISOUSC": "30",
        "BASE": "007640930",
        "PTEC": "TH..",
        "IINST": "002",
        "IMAX": "090",
        "PAPP": "00390",
        "HHPHC": "A",
        "MOTDETAT": "000000",
    }


def test_validate_preserves_unknown_labels():
    mapping = LineValidator().validate(build_frame([("FOO", "BAR"), ("PAPP", "00100")]))
    assert mapping == {"FOO": "BAR", "PAPP": "00100"}


def test_duplicate_label_last_wins():
    frame = build_frame([("PAPP", "00100"), ("PAPP", "00200")])
    assert LineValidator().validate(frame) == {"PAPP": "00200"}


def test_known_checksums():
    assert compute_checksum("IINST 002 Y") == "Y"
    assert compute_checksum("ISOUSC 30 9") == "9"
    assert compute_checksum("BASE 007640930 (") == "("


def test_two_token_line_is_malformed():
    frame = b"\x02\nIINST 002\r\x03"
    with pytest.raises(MalformedLineError):
        LineValidator().validate(frame)


def test_four_token_line_is_malformed():
    frame = b"\x02\nIINST 002 Y Z\r\x03"
    with pytest.raises(MalformedLineError):
        LineValidator().validate(frame)


def test_multi_character_checksum_is_malformed():
    with pytest.raises(MalformedLineError):
        split_line("IINST 002 YY")


@pytest.mark.parametrize("line", ["", "Y", " Y", "  Y"])
def test_truncated_lines_are_malformed(line):
    with pytest.raises(MalformedLineError):
        split_line(line)


def test_blank_lines_are_skipped():
    frame = b"\x02\n" + build_line("IINST", "002").encode() + b"\r\n\r\n\r\x03"
    assert LineValidator().validate(frame) == {"IINST": "002"}


def test_empty_frame_yields_empty_mapping():
    assert LineValidator().validate(b"\x02\x03") == {}


def test_non_ascii_frame_is_malformed():
    with pytest.raises(MalformedLineError):
        LineValidator().validate(b"\x02\nIINST 0\xe902 Y\r\x03")


def test_malformed_line_rejects_whole_frame():
    frame = b"\x02\n" + build_line("IINST", "002").encode() + b"\r\nBROKEN\r\x03"
    with pytest.raises(FrameValidationError):
        LineValidator().validate(frame)


def test_space_checksum_is_accepted():
    # "0 0" sums to 0x80, whose low 6 bits are 0: the checksum is a space
    line = build_line("0", "0")
    assert line.endswith("  ")
    assert LineValidator().validate(b"\x02\n" + line.encode() + b"\r\x03") == {"0": "0"}


@given(labels, values)
def test_checksum_round_trip(label, value):
    line = build_line(label, value)
    assert split_line(line) == (label, value, line[-1])
    assert compute_checksum(line) == line[-1]


@given(labels, values)
def test_checksum_is_printable(label, value):
    assert 0x20 <= ord(compute_checksum(f"{label} {value} ?")) <= 0x5F


@given(st.integers(min_value=0, max_value=9), checksum_chars)
def test_single_checksum_mutation_rejects_frame(line_number, replacement):
    lines = SAMPLE_FRAME[2:-2].split(b"\r\n")
    original = lines[line_number]
    if chr(original[-1]) == replacement:
        replacement = chr(original[-1] + 1)
    lines[line_number] = original[:-1] + replacement.encode("ascii")
    frame = b"\x02\n" + b"\r\n".join(lines) + b"\r\x03"

    with pytest.raises(ChecksumMismatchError) as excinfo:
        LineValidator().validate(frame)
    assert excinfo.value.stage == "validate"
