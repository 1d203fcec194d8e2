"""Match enumeration and the search run."""
