from __future__ import annotations

from sqlalchemy import select

from .db import SessionLocal
from .models import Customer


SEED_CUSTOMERS = [
    {
        "name": "Evil Rabbit",
        "email": "evil@rabbit.com",
        "image_url": "/customers/evil-rabbit.png",
    },
    {
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "name": "Michael Novotny",
        "email": "michael@novotny.com",
        "image_url": "/customers/michael-novotny.png",
    },
]


def seed_customers(session_factory=SessionLocal) -> int:
    created = 0
    with session_factory() as session:
        for entry in SEED_CUSTOMERS:
            exists = session.execute(
                select(Customer).where(Customer.email == entry["email"])
            ).scalar_one_or_none()
            if exists:
                continue
            session.add(Customer(**entry))
            created += 1
        if created:
            session.commit()
    return created


def main() -> None:
    created = seed_customers()
    print(f"Seeded customers: {created}")


if __name__ == "__main__":
    main()
