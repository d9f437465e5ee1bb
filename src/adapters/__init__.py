"""Adapters: HTTP client, go-import resolver, `go list` runner, exporters."""
