"""
Core application services.

`DatabaseProvider` decides between the cached feature database and a fresh
download, while `UpdateChecker` decides whether the release host needs to be
asked about a newer version of the tool. `AppContext` wires both from the
configuration.
"""
