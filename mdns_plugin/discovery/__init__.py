"""Service advertisement for the mdns_plugin package."""
