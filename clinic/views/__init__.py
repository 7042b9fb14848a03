"""HTTP handlers of the clinic API."""
