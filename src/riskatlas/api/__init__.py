"""HTTP surface: chat relay route, CORS and error handling."""

API_PREFIX = "/api"
