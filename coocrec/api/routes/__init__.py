"""Route handlers of the CoocRec API."""
