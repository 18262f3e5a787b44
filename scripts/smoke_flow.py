"""
Скрипт для ручной проверки основного сценария на запущенном сервере:
регистрация, заказ, принятие, завершение, оплата.
"""
import asyncio
import uuid

import httpx

BASE_URL = "http://127.0.0.1:8000/api"


def check(response: httpx.Response, expected: int, label: str) -> bool:
    if response.status_code == expected:
        print(f"✅ {label}")
        return True
    print(f"❌ {label}: {response.status_code} - {response.text}")
    return False


async def register(client: httpx.AsyncClient, role: str, **extra) -> dict:
    payload = {
        "email": f"{role}-{uuid.uuid4().hex[:8]}@diwaifox.com",
        "password": "testpassword123",
        "name": f"Smoke {role}",
        "phone": "+675-7000-0000",
        "role": role,
    }
    payload.update(extra)
    response = await client.post(f"{BASE_URL}/auth/register", json=payload)
    if not check(response, 201, f"Регистрация ({role})"):
        raise SystemExit(1)
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def smoke_flow():
    async with httpx.AsyncClient() as client:
        print("=== Проверка сценария поездки ===")

        print("\n1. Регистрация пассажира и водителя...")
        passenger = await register(client, "passenger")
        driver = await register(client, "driver", vehicleType="suv", licensePlate="SMK-001")

        print("\n2. Водитель выходит на линию...")
        response = await client.put(f"{BASE_URL}/drivers/status", json={"status": "online"}, headers=driver)
        check(response, 200, "Статус online")

        print("\n3. Пассажир заказывает suv...")
        response = await client.post(
            f"{BASE_URL}/rides",
            json={"pickupLocation": "Boroko", "destination": "Jacksons Airport", "vehicleType": "suv"},
            headers=passenger,
        )
        if not check(response, 201, "Поездка создана"):
            return
        ride = response.json()["ride"]
        print(f"   Цена: {ride['fare']}, ETA: {ride['eta']} мин, расстояние: {ride['distance']} км")

        print("\n4. Водитель принимает заказ...")
        response = await client.put(f"{BASE_URL}/rides/{ride['id']}/accept", headers=driver)
        check(response, 200, "Заказ принят")

        print("\n5. Повторное принятие (ожидается 400)...")
        response = await client.put(f"{BASE_URL}/rides/{ride['id']}/accept", headers=driver)
        check(response, 400, "Повторное принятие отклонено")

        print("\n6. Поездка начата и завершена...")
        for status in ("in-progress", "completed"):
            response = await client.put(
                f"{BASE_URL}/rides/{ride['id']}/status", json={"status": status}, headers=driver
            )
            check(response, 200, f"Статус {status}")

        print("\n7. Заработок водителя...")
        response = await client.get(f"{BASE_URL}/users/me", headers=driver)
        earnings = response.json()["user"]["earnings"]
        if earnings == ride["fare"]:
            print(f"✅ Начислено {earnings}")
        else:
            print(f"❌ Ожидалось {ride['fare']}, получено {earnings}")

        print("\n8. Оплата пассажиром...")
        response = await client.post(
            f"{BASE_URL}/payments", json={"rideId": ride["id"], "amount": ride["fare"]}, headers=passenger
        )
        check(response, 201, "Платеж принят")

        print("\n9. Запрос без токена (ожидается 401)...")
        response = await client.get(f"{BASE_URL}/rides")
        check(response, 401, "Запрос без токена отклонен")

        print("\n10. Запрос с неверным токеном (ожидается 403)...")
        response = await client.get(f"{BASE_URL}/rides", headers={"Authorization": "Bearer invalid_token_here"})
        check(response, 403, "Неверный токен отклонен")


if __name__ == "__main__":
    print("Убедитесь, что сервер запущен на http://127.0.0.1:8000")
    asyncio.run(smoke_flow())
