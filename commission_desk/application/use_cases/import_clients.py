"""Use case importing clients from a CSV file."""

import csv
import io
import uuid
from collections.abc import Callable
from datetime import datetime

from commission_desk.application.ports.catalog_repository import (
    ClientRepositoryPort,
)
from commission_desk.domain.errors import ValidationError
from commission_desk.domain.models import Client
from commission_desk.infrastructure.logging.logger import get_app_logger


class ImportClientsCsvUseCase:
    """Create clients from ``name,phone,email`` rows.

    A first line mentioning ``nombre`` is treated as a header. Rows without a
    name are skipped.
    """

    def __init__(
        self,
        client_repo: ClientRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._client_repo = client_repo
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._clock = clock or datetime.now

    def execute(self, content: str) -> int:
        """Parse CSV text and store the clients found.

        Args:
            content: Raw CSV text.

        Returns:
            int: Number of clients imported.

        Raises:
            ValidationError: If no valid client row is found.
        """
        clients = self.parse(content)
        if not clients:
            raise ValidationError("No valid clients found in the CSV file")
        imported = self._client_repo.add_clients(clients)
        self._logger.info(f"Imported {imported} clients from CSV")
        return imported

    def parse(self, content: str) -> list[Client]:
        lines = [line for line in content.splitlines() if line.strip()]
        if not lines:
            return []
        if "nombre" in lines[0].lower():
            lines = lines[1:]

        clients = []
        created_at = self._clock()
        for row in csv.reader(io.StringIO("\n".join(lines))):
            values = [value.strip().strip('"') for value in row]
            name = values[0] if values else ""
            if not name:
                continue
            clients.append(
                Client(
                    id=self._id_factory(),
                    name=name,
                    phone=self._column(values, 1),
                    email=self._column(values, 2),
                    created_at=created_at,
                )
            )
        skipped = len(lines) - len(clients)
        if skipped:
            self._logger.warning(f"Skipped {skipped} CSV rows without a name")
        return clients

    @staticmethod
    def _column(values: list[str], index: int) -> str | None:
        if index < len(values) and values[index]:
            return values[index]
        return None


__all__ = ["ImportClientsCsvUseCase"]
