import os

import pytest

import json_parser as jp

TEST_DIR = os.path.dirname(__file__)

# List all .json files in this directory
json_files = sorted(f for f in os.listdir(TEST_DIR) if f.endswith(".json"))

VALID_FILES = [f for f in json_files if f.startswith("pass")]
INVALID_FILES = [f for f in json_files if f.startswith("fail")]

# Hard fail if test files are missing
if not VALID_FILES:
    raise RuntimeError("No pass*.json files found in conformance directory")
if not INVALID_FILES:
    raise RuntimeError("No fail*.json files found in conformance directory")


def _read(filename):
    # newline="" keeps CR characters exactly as stored
    with open(os.path.join(TEST_DIR, filename), "r", encoding="utf-8", newline="") as f:
        return f.read()

@pytest.mark.parametrize("filename", VALID_FILES)
def test_valid_json_decodes(filename):
    jp.decode(_read(filename))

@pytest.mark.parametrize("filename", INVALID_FILES)
def test_invalid_json_raises(filename):
    with pytest.raises(jp.JSONSyntaxError):
        jp.decode(_read(filename))

def test_pass1_values():
    doc = jp.decode(_read("pass1.json"))
    assert doc[0] == "JSON Test Pattern pass1"
    assert doc[4] == -42
    table = doc[8]
    assert table["integer"] == 1234567890
    assert table["E"] == 1.234567890e34
    assert table["controls"] == "\b\f\n\r\t"
    assert table["slash"] == "/ & /"
    assert table["hex"] == "\u0123\u4567\u89ab\ucdef\uabcd\uef4a"
    assert table[" s p a c e d "] == [1, 2, 3, 4, 5, 6, 7]
    assert doc[-1] == "rosebud"

def test_pass2_reaches_depth_limit_exactly():
    value = jp.decode(_read("pass2.json"))
    for _ in range(18):
        value = value[0]
    assert value == ["Not too deep"]
    with pytest.raises(jp.DepthLimitExceeded):
        jp.decode(_read("pass2.json"), max_depth=18)

def test_pass5_unicode_and_duplicate_keys():
    doc = jp.decode(_read("pass5.json"))
    assert doc == {"emoji": "\U0001F600", "raw": "café 日本", "dup": 2}
    with pytest.raises(jp.DuplicateKey):
        jp.decode(_read("pass5.json"), allow_dup=False)

def test_fail18_is_rejected_for_depth():
    with pytest.raises(jp.DepthLimitExceeded):
        jp.decode(_read("fail18.json"))
    assert jp.decode(_read("fail18.json"), max_depth=20)
