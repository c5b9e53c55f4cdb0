# filters/location_filter.py


def filter_outages(records, pattern=None):
    """
    Keep records whose location or street contains `pattern`, ignoring case.
    Plain substring match. No pattern means every record is kept.
    """
    if pattern is None or not pattern.strip():
        return list(records)
    needle = pattern.casefold()
    return [
        r for r in records
        if needle in r.location.casefold() or needle in r.street.casefold()
    ]
