"""In-memory stand-in for the SwiftLogi backend, served through httpx.MockTransport."""

import json
import re

import httpx

API_URL = "http://swiftlogi.test/api"


class FakeBackend:
    def __init__(self):
        self.users = {
            "buyer@example.com": {
                "id": "u-buyer",
                "name": "Ada",
                "email": "buyer@example.com",
                "role": "buyer",
                "password": "pw",
                "walletBalance": 10000,
            },
            "rider@example.com": {
                "id": "u-rider",
                "name": "Tunde",
                "email": "rider@example.com",
                "role": "rider",
                "password": "pw",
            },
            "seller@example.com": {
                "id": "u-seller",
                "name": "Bisi",
                "email": "seller@example.com",
                "role": "seller",
                "password": "pw",
            },
        }
        self.products = [
            {
                "_id": "p1",
                "name": "Rice",
                "price": 1500,
                "seller": "u-seller",
                "sellerName": "Bisi",
                "location": "Ikeja",
            },
            {
                "_id": "p2",
                "name": "Beans",
                "price": 2500,
                "seller": "u-other",
                "sellerName": "Kemi",
                "location": "Yaba",
            },
        ]
        self.orders = []
        self.requests = []  # (method, path) log
        self.fail = {}  # (method, path) -> status code to answer with

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def paths(self, method: str = "GET"):
        return [p for m, p in self.requests if m == method]

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        self.requests.append((request.method, path))
        if (request.method, path) in self.fail:
            status = self.fail[(request.method, path)]
            return httpx.Response(status, json={"error": "Server is sad"})

        body = json.loads(request.content) if request.content else {}

        if request.method == "POST" and path == "/login":
            user = self.users.get(body.get("email"))
            if not user or user["password"] != body.get("password"):
                return httpx.Response(400, json={"error": "Invalid credentials"})
            public = {k: v for k, v in user.items() if k != "password"}
            return httpx.Response(200, json={"token": f"tok-{user['id']}", "user": public})

        if request.method == "POST" and path == "/register":
            if body["email"] in self.users:
                return httpx.Response(400, json={"error": "User already exists"})
            user = dict(body, id=f"u-{len(self.users) + 1}")
            self.users[body["email"]] = user
            public = {k: v for k, v in user.items() if k != "password"}
            return httpx.Response(201, json={"user": public})

        if path == "/products":
            if request.method == "GET":
                return httpx.Response(200, json=self.products)
            product = dict(body, _id=f"p{len(self.products) + 1}")
            self.products.append(product)
            return httpx.Response(201, json=product)

        m = re.fullmatch(r"/user/orders/([^/]+)", path)
        if m and request.method == "GET":
            mine = [o for o in self.orders if o["buyerId"] == m.group(1)]
            return httpx.Response(200, json=mine)

        if path == "/orders" and request.method == "POST":
            order = dict(body, _id=f"o{len(self.orders) + 1}", status="placed")
            self.orders.append(order)
            return httpx.Response(201, json={"order": order})

        if path == "/jobs" and request.method == "GET":
            return httpx.Response(
                200, json=[o for o in self.orders if o["status"] == "placed"]
            )

        m = re.fullmatch(r"/jobs/([^/]+)/(accept|deliver|status)", path)
        if m and request.method == "POST":
            order = next((o for o in self.orders if o["_id"] == m.group(1)), None)
            if order is None:
                return httpx.Response(404, json={"error": "Job not found"})
            order["status"] = {"accept": "shipped", "deliver": "delivered"}.get(
                m.group(2), body.get("status")
            )
            order["riderId"] = body.get("riderId")
            return httpx.Response(200, json={"ok": True})

        return httpx.Response(404, json={"error": "Not found"})
