from ghproxy_lists import extract_array

SAMPLE = """
const clone_url = [
    ['https://a.example/https://github.com', 'US', 'first&#10;line two'],
    // ['https://commented.example', 'JP', 'skipped'],
    ['https://a.example/https://github.com', 'US', 'duplicate'],
];
"""

records = extract_array(SAMPLE, "clone_url")
assert len(records) == 1, f"expected 1 record, got {len(records)}"
assert records[0].description == "first\nline two", "newline token not converted"
assert extract_array(SAMPLE, "raw_url") == [], "unexpected records for missing array"
print("extract_array smoke test passed")
