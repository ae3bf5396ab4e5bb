import asyncio
import os

from sdk.catalog_client import CatalogClient, CatalogAPIError


async def fetch_first_page(client, n):
    try:
        data = await client.list_products_async(page=1)
        return [p["id"] for p in data["items"]]
    except CatalogAPIError as e:
        print(f"❌ request {n} failed: {e}")
    except Exception as e:
        print(f"❌ request {n} unexpected failure: {e}")
    return None


async def main():
    c = CatalogClient(base_url=os.environ.get("CATALOG_API_URL", "http://127.0.0.1:8085"))

    print("\n⚡ Fetching the first catalog page 20 times concurrently...")
    results = await asyncio.gather(*(fetch_first_page(c, n) for n in range(20)))
    orderings = {tuple(r) for r in results if r is not None}

    if len(orderings) == 1:
        print(f"✅ every response returned the same ordering: {list(orderings.pop())}")
    else:
        print(f"⚠️  saw {len(orderings)} different orderings:")
        for ordering in orderings:
            print("   ", list(ordering))


if __name__ == "__main__":
    asyncio.run(main())
