import asyncio
import json
from typing import Any

import numpy as np
from httpx import AsyncBaseTransport, AsyncClient, Response, Timeout
from numpy.typing import NDArray

from repeater_los.domain.exceptions import (
    APIException,
    AuthenticationException,
    InvalidResponseException,
    RateLimitException,
    TransientAPIException,
)
from repeater_los.domain.interfaces import BaseElevationsApiClient
from repeater_los.domain.models.units import Elevation
from repeater_los.logging_config import get_logger

from .decorators import async_retry

logger = get_logger(__name__)


def _raise_for_status(response: Response) -> None:
    if response.is_success:
        return

    try:
        error_data = response.json()
    except json.JSONDecodeError:
        error_data = {"message": response.text}
    if isinstance(error_data, dict):
        details = ": ".join(str(v) for v in error_data.values())
    else:
        details = str(error_data)
    message = f"{response.status_code} - {details}"

    if response.status_code == 429:
        raise RateLimitException(message)
    if response.status_code in (401, 403):
        raise AuthenticationException(message)
    if response.status_code >= 500:
        raise TransientAPIException(message)
    raise APIException(message)


class AsyncElevationsApiClient(BaseElevationsApiClient):
    """
    Ground elevation lookups against a RapidAPI-style elevation endpoint.

    The endpoint takes ``points=[[lat,lon],...]`` and answers with a JSON
    list of elevations in meters, one per point.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        transport: AsyncBaseTransport | None = None,
    ):
        super().__init__(api_url, api_key)
        self.transport = transport

    @staticmethod
    def _points_query(coord_vect_block: NDArray[np.floating[Any]]) -> str:
        return "[" + ",".join(f"[{lat:.6f},{lon:.6f}]" for lat, lon in coord_vect_block) + "]"

    @async_retry()
    async def elevations_api_request(
        self, coord_vect_block: NDArray[np.floating[Any]], **kwargs
    ) -> list[Elevation]:
        """Asynchronous API request with httpx"""
        headers = {
            "X-RapidAPI-Host": self.api_url.split("/")[2],  # Getting host from API URL
            "X-RapidAPI-Key": self.api_key,
        }
        querystring = {"points": self._points_query(coord_vect_block)}

        timeout_config = Timeout(kwargs.get("timeout", 10.0), connect=5.0)

        async with AsyncClient(
            timeout=timeout_config, follow_redirects=True, transport=self.transport
        ) as client:
            request = client.build_request(
                "GET", self.api_url, params=querystring, headers=headers
            )
            logger.info(f"HTTP Request: {request.method} {request.url}")
            response = await client.send(request)
            logger.info(f"HTTP Response: {response.status_code}")

            _raise_for_status(response)

            try:
                payload = response.json()
            except json.JSONDecodeError as e:
                raise InvalidResponseException(f"Elevation response is not JSON: {e}") from e

            if not isinstance(payload, list) or len(payload) != len(coord_vect_block):
                raise InvalidResponseException(
                    f"Expected a list of {len(coord_vect_block)} elevations, "
                    f"got {type(payload).__name__}"
                )
            try:
                return [Elevation(float(e)) for e in payload]
            except (TypeError, ValueError) as e:
                raise InvalidResponseException(f"Non-numeric elevation: {e}") from e

    async def fetch_elevations(
        self, coord_vect: NDArray[np.floating[Any]], block_size: int
    ) -> NDArray[np.float64]:
        """
        Retrieves elevation data in concurrent blocks for the given coordinate vector.
        """
        if coord_vect.shape[0] == 0:
            return np.array([], dtype=np.float64)

        blocks_num = (coord_vect.shape[0] + block_size - 1) // block_size
        logger.info(
            f"Retrieving elevation data for {coord_vect.shape[0]} coordinates in {blocks_num} blocks..."
        )

        tasks = [
            self.elevations_api_request(coord_vect[n * block_size : (n + 1) * block_size])
            for n in range(blocks_num)
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        errors = [(idx, r) for idx, r in enumerate(results) if isinstance(r, BaseException)]
        if errors:
            for idx, error in errors:
                logger.error(f"Elevation block {idx} failed: {type(error).__name__}: {error}")
            first = errors[0][1]
            if isinstance(first, APIException):
                raise first
            raise APIException(f"Elevation block {errors[0][0]} failed: {first}") from first

        logger.debug(f"---- Got {len(results)} blocks -----")
        return np.concatenate([np.array(r, dtype=np.float64) for r in results])
