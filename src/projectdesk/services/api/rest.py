"""Table access over the backend's PostgREST endpoints."""

from __future__ import annotations

from typing import Any

from projectdesk.errors import NotFoundError
from projectdesk.services.api.client import APIClient

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


def eq(value: Any) -> str:
    """PostgREST equality filter."""
    return f"eq.{value}"


class TableAPI:
    """Row-level access to a single table.

    Subclasses set `table`. Rows are plain dicts; mapping to models is the
    services' job.
    """

    table: str = ""

    def __init__(self, client: APIClient):
        self.client = client

    @property
    def path(self) -> str:
        return f"/rest/v1/{self.table}"

    async def select(
        self,
        *,
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        ascending: bool = True,
    ) -> list[dict]:
        """Select all rows matching equality *filters*, optionally ordered."""
        params: dict[str, Any] = {"select": "*"}

        for column, value in (filters or {}).items():
            params[column] = eq(value)
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"

        response = await self.client.get(self.path, params=params)
        return response.json()

    async def select_single(self, row_id: str) -> dict:
        """Select exactly one row by id.

        Raises:
            NotFoundError: If no visible row has this id
        """
        rows = await self.select(filters={"id": row_id})
        if not rows:
            raise NotFoundError(f"No {self.table} row with id {row_id}", status_code=404)
        return rows[0]

    async def insert(self, values: dict[str, Any]) -> dict:
        """Insert one row and return it as stored."""
        response = await self.client.post(
            self.path, json=values, headers=RETURN_REPRESENTATION
        )
        rows = response.json()
        return rows[0] if isinstance(rows, list) else rows

    async def update(self, row_id: str, values: dict[str, Any]) -> dict:
        """Update one row by id and return it.

        Raises:
            NotFoundError: If no visible row has this id
        """
        response = await self.client.patch(
            self.path,
            params={"id": eq(row_id)},
            json=values,
            headers=RETURN_REPRESENTATION,
        )
        rows = response.json()
        if not rows:
            raise NotFoundError(f"No {self.table} row with id {row_id}", status_code=404)
        return rows[0]

    async def delete(self, row_id: str) -> dict:
        """Delete one row by id and return the deleted row.

        Raises:
            NotFoundError: If no visible row has this id
        """
        response = await self.client.delete(
            self.path,
            params={"id": eq(row_id)},
            headers=RETURN_REPRESENTATION,
        )
        rows = response.json()
        if not rows:
            raise NotFoundError(f"No {self.table} row with id {row_id}", status_code=404)
        return rows[0]
