import bleach


def clean_text(value):
    """Strip surrounding whitespace and any markup from free text."""
    return bleach.clean((value or '').strip(), tags=set(), strip=True)
