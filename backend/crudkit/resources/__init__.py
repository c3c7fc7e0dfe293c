"""Resource definitions — one RestResource per exposed entity."""
