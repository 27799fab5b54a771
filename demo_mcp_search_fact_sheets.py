# demo_mcp_search_fact_sheets.py
# Version: v1

r"""
Quick demo for the searchFactSheetsByName MCP task.

Usage (bash):

  export LEANIX_SUBDOMAIN=acme
  export LEANIX_API_TOKEN=...
  export LEANIX_TEST_SEARCH="Azure"   # optional
  python demo_mcp_search_fact_sheets.py
"""

import asyncio
import os

from leanix_mcp.tools.tasks import search_fact_sheets_by_name


QUERY = os.environ.get("LEANIX_TEST_SEARCH", "Azure")


async def main() -> None:
    print("Calling MCP task: search_fact_sheets_by_name()")
    print(f"Query: {QUERY!r}")
    print()

    results = await search_fact_sheets_by_name(QUERY)

    print("Matches:", len(results))
    print()

    for fs in results:
        print(f"- {fs['name']} (id={fs['id']}, type={fs.get('type')})")
        if fs.get("description"):
            print(f"    desc: {fs['description']}")
    if not results:
        print("No matching fact sheets found.")


if __name__ == "__main__":
    asyncio.run(main())
