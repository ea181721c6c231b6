"""Player Stats API: roster CRUD service and browsable roster UI."""
