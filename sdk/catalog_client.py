# sdk/catalog_client.py
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
import requests
from rich import print


class CatalogAPIError(Exception):
    """An error envelope (or a non-JSON failure) returned by the catalog API."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(f"{status_code} {code}: {message}")
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


def _list_params(category=None, sort=None, page=None, page_size=None, view=None) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if category:
        params["category"] = category
    if sort:
        params["sort"] = sort
    if page is not None:
        params["page"] = page
    if page_size is not None:
        params["pageSize"] = page_size
    if view:
        params["view"] = view
    return params


def _unwrap(r) -> Any:
    """Return ``data`` from a success envelope or raise ``CatalogAPIError``."""
    try:
        body = r.json()
    except ValueError:
        raise CatalogAPIError(r.status_code, "HTTP_ERROR", r.text or f"HTTP {r.status_code}")

    if isinstance(body, dict) and body.get("success") is False:
        err = body.get("error") or {}
        raise CatalogAPIError(
            r.status_code,
            err.get("code", "HTTP_ERROR"),
            err.get("message", f"HTTP {r.status_code}"),
            err.get("details"),
        )
    if r.status_code >= 400:
        raise CatalogAPIError(r.status_code, "HTTP_ERROR", f"HTTP {r.status_code}")
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None,
                 timeout: int = 10, session=None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        # any requests-compatible session works, e.g. FastAPI's TestClient
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.transport = transport
        self.headers: Dict[str, str] = {}
        if api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"
            self.session.headers.update(self.headers)

    def health(self):
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        return _unwrap(r)

    # Catalog listing
    def list_products(self, category: Optional[str] = None, sort: Optional[str] = None,
                      page: Optional[int] = None, page_size: Optional[int] = None, view: Optional[str] = None):
        params = _list_params(category, sort, page, page_size, view)
        r = self.session.get(f"{self.base_url}/product", params=params, timeout=self.timeout)
        return _unwrap(r)

    def list_by_category(self, category: str, sort: Optional[str] = None, page: Optional[int] = None,
                         page_size: Optional[int] = None, view: Optional[str] = None):
        params = _list_params(None, sort, page, page_size, view)
        r = self.session.get(f"{self.base_url}/product/category/{quote(category, safe='')}",
                             params=params, timeout=self.timeout)
        return _unwrap(r)

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/product/{product_id}", timeout=self.timeout)
        return _unwrap(r)

    # Async listing (example)
    async def list_products_async(self, category: Optional[str] = None, sort: Optional[str] = None,
                                  page: Optional[int] = None, page_size: Optional[int] = None,
                                  view: Optional[str] = None):
        params = _list_params(category, sort, page, page_size, view)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport, headers=self.headers) as client:
            r = await client.get(f"{self.base_url}/product", params=params)
            return _unwrap(r)


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Catalog API CLI")
    parser.add_argument("--base-url", default=os.environ.get("CATALOG_API_URL", "http://127.0.0.1:8085"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List catalog products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--sort", choices=["name_asc", "name_desc", "category", "date_created", "popularity"])
    lp.add_argument("--page", type=int)
    lp.add_argument("--page-size", type=int, choices=[12, 24, 36, 48])

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    lc = subparsers.add_parser("list-category", help="List products of one category")
    lc.add_argument("--category", required=True)
    lc.add_argument("--sort", choices=["name_asc", "name_desc", "category", "date_created", "popularity"])
    lc.add_argument("--page", type=int)
    lc.add_argument("--page-size", type=int, choices=[12, 24, 36, 48])

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category, args.sort, args.page, args.page_size))
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "list-category":
            print(c.list_by_category(args.category, args.sort, args.page, args.page_size))
    except CatalogAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
