#!/usr/bin/env python
import os

from sdk.catalog_client import CatalogClient, CatalogAPIError


def main():
    c = CatalogClient(base_url=os.environ.get("CATALOG_API_URL", "http://127.0.0.1:8085"))

    # -----------------------------
    # Health
    # -----------------------------
    print("Checking service...")
    print(c.health())

    # -----------------------------
    # First catalog page (defaults)
    # -----------------------------
    print("\nListing first page (newest first, featured on top)...")
    page = c.list_products()
    for p in page["items"]:
        print(f"  #{p['id']:>3} {p['name']:<34} featured={p['featured']} new={p['isNew']}")
    print(f"  total={page['total']} pages={page['totalPages']}")

    # -----------------------------
    # Sorted by name
    # -----------------------------
    print("\nSorting by name (A-Z)...")
    for p in c.list_products(sort="name_asc")["items"]:
        print(f"  {p['name']}")

    # -----------------------------
    # Category browsing
    # -----------------------------
    category = page["items"][0]["category"] if page["items"] else "Office"
    print(f"\nListing category '{category}'...")
    print(c.list_by_category(category, sort="name_asc"))

    # -----------------------------
    # Single product
    # -----------------------------
    if page["items"]:
        pid = page["items"][0]["id"]
        print(f"\nFetching product {pid}...")
        print(c.get_product(pid))

    # -----------------------------
    # Error envelopes
    # -----------------------------
    print("\nRequesting an unsupported page size...")
    try:
        c.list_products(page_size=50)
    except CatalogAPIError as e:
        print(f"  {e.status_code} {e.code}: {e.message}")

    print("\nRequesting an unknown category...")
    try:
        c.list_by_category("Garage")
    except CatalogAPIError as e:
        print(f"  {e.status_code} {e.code}: {e.message}")


if __name__ == "__main__":
    main()
