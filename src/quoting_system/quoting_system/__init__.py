"""Field-service quoting package.

Organized by feature modules (allocation, quotes, rates, reports, ...) with a
thin Flask controller layer over plain service/repository layers.
"""
