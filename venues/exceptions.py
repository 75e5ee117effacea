class VenueLookupError(Exception):
    """Pinball Map could not be reached or returned an unusable response."""
