def slugify(value: str) -> str:
    """Normalize a display name into a URL-safe slug.

    Lowercases the input, turns every non-alphanumeric character into a
    hyphen and collapses hyphen runs. Letters and digits from any script
    are kept, so "Rust编程" becomes "rust编程" and "C++ / Go" becomes "c-go".
    """
    mapped = "".join(ch if ch.isalnum() else "-" for ch in value.lower())
    return "-".join(part for part in mapped.split("-") if part)
