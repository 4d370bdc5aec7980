"""
Example script exercising the REST auth endpoints and the GraphQL API.

Usage:
    python examples/graphql_client.py [--base-url http://localhost:8000] [--delete]
"""
import argparse
import json
import logging
import sys
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

logger = logging.getLogger("graphql_client")

PASSWORD = "password123"

ME_QUERY = """
query {
    me { id email name role createdAt }
}
"""

CREATE_APPOINTMENT = """
mutation CreateAppointment($input: AppointmentInput!) {
    createAppointment(input: $input) {
        id title description startTime endTime status userId createdAt
    }
}
"""

APPOINTMENTS_QUERY = """
query {
    appointments { id title description startTime endTime status userId }
}
"""

APPOINTMENT_QUERY = """
query GetAppointment($id: ID!) {
    appointment(id: $id) { id title description startTime endTime status updatedAt }
}
"""

UPDATE_APPOINTMENT = """
mutation UpdateAppointment($id: ID!, $input: AppointmentUpdateInput!) {
    updateAppointment(id: $id, input: $input) { id title description status updatedAt }
}
"""

DELETE_APPOINTMENT = """
mutation DeleteAppointment($id: ID!) {
    deleteAppointment(id: $id)
}
"""


class GraphQLRequestError(Exception):
    pass


class ApiClient:
    def __init__(self, base_url: str, timeout: float = 10.0):
        self.http = httpx.Client(base_url=base_url, timeout=timeout)
        self.token: Optional[str] = None

    def close(self):
        self.http.close()

    def _headers(self) -> dict:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def wait_until_ready(self, timeout: float = 8.0, interval: float = 0.25) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            try:
                if self.http.get("/health").status_code == 200:
                    return True
            except httpx.TransportError:
                pass
            time.sleep(interval)
        return False

    def register(self, email: str, password: str, name: str) -> httpx.Response:
        return self.http.post(
            "/auth/register", json={"email": email, "password": password, "name": name}
        )

    def login(self, email: str, password: str) -> Optional[str]:
        response = self.http.post("/auth/login", json={"email": email, "password": password})
        if response.status_code != 200:
            logger.error("Login failed: %s %s", response.status_code, response.text)
            return None
        self.token = response.json()["token"]
        return self.token

    def graphql(self, query: str, variables: Optional[dict] = None) -> dict:
        payload = {"query": query}
        if variables:
            payload["variables"] = variables
        response = self.http.post("/graphql", json=payload, headers=self._headers())
        if response.status_code != 200:
            raise GraphQLRequestError(f"HTTP {response.status_code}: {response.text}")
        result = response.json()
        if result.get("errors"):
            raise GraphQLRequestError(json.dumps(result["errors"]))
        return result["data"]


def run(base_url: str, delete: bool = False) -> int:
    client = ApiClient(base_url)
    try:
        if client.wait_until_ready():
            logger.info("API is reachable at %s", base_url)
        else:
            logger.warning("API not ready yet, continuing")

        email = f"test{int(time.time() * 1000)}@example.com"
        response = client.register(email, PASSWORD, "Test User")
        if response.status_code != 201:
            logger.error("Register failed: %s %s", response.status_code, response.text)
            return 1
        logger.info("Registered %s", email)

        if not client.login(email, PASSWORD):
            return 1
        logger.info("Logged in, token acquired")

        logger.info("me: %s", client.graphql(ME_QUERY)["me"])

        start = datetime.now(timezone.utc) + timedelta(hours=1)
        end = start + timedelta(hours=1)
        created = client.graphql(CREATE_APPOINTMENT, {
            "input": {
                "title": "Test Appointment",
                "description": "This is a test appointment",
                "startTime": start.isoformat(),
                "endTime": end.isoformat(),
                "status": "pending",
            }
        })["createAppointment"]
        logger.info("Created appointment: %s", created)
        appointment_id = created["id"]

        logger.info("appointments: %s", client.graphql(APPOINTMENTS_QUERY)["appointments"])
        logger.info(
            "appointment: %s",
            client.graphql(APPOINTMENT_QUERY, {"id": appointment_id})["appointment"],
        )
        updated = client.graphql(UPDATE_APPOINTMENT, {
            "id": appointment_id,
            "input": {"title": "Updated Appointment Title", "status": "confirmed"},
        })["updateAppointment"]
        logger.info("Updated appointment: %s", updated)

        if delete:
            deleted = client.graphql(DELETE_APPOINTMENT, {"id": appointment_id})
            logger.info("Deleted appointment: %s", deleted["deleteAppointment"])
    except (GraphQLRequestError, httpx.HTTPError) as exc:
        logger.error("Request failed: %s", exc)
        return 1
    finally:
        client.close()

    logger.info("All requests completed")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--delete", action="store_true", help="delete the appointment at the end")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    return run(args.base_url, delete=args.delete)


if __name__ == "__main__":
    sys.exit(main())
