"""HTTP value types: parsed URIs, query parameters, headers, requests, responses."""
