"""
Idempotent seed-скрипт.
Запуск:
  python seed.py --reset        # дропнуть и пересоздать таблицы + демо-данные
  python seed.py --team-only    # только участники команды и код доступа
  python seed.py                # мягкое наполнение недостающих данных (idempotent)
"""
from datetime import date, timedelta
import argparse

from app import create_app
from extensions import db
from models import AppSetting, Booking, TeamMember

DEMO_TEAM = ["Alice", "Bob", "Carol"]

DEMO_SETTINGS = {
    "key_location": "Reception desk, top drawer",
    "car_model": "Toyota Corolla",
    "car_year": "2021",
    "car_color": "Silver",
    "car_fuel_type": "Hybrid",
}

# ---- вспомогательные утилиты ----
def get_or_create(model, defaults=None, **by):
    """Идемпотентное создание по уникальным ключам."""
    inst = db.session.query(model).filter_by(**by).first()
    if inst:
        return inst, False
    data = dict(by)
    if defaults:
        data.update(defaults)
    inst = model(**data)
    db.session.add(inst)
    db.session.flush()
    return inst, True

def seed_team(app):
    created = 0
    for name in DEMO_TEAM:
        _, was_created = get_or_create(TeamMember, defaults={"name": name}, name_key=name.lower())
        created += was_created
    _, was_created = get_or_create(
        AppSetting, defaults={"value": app.config["DEFAULT_TEAM_PASSCODE"]}, key="team_passcode"
    )
    created += was_created
    return created

def seed_settings():
    created = 0
    for key, value in DEMO_SETTINGS.items():
        _, was_created = get_or_create(AppSetting, defaults={"value": value}, key=key)
        created += was_created
    return created

def seed_bookings():
    """Пара броней на ближайшие дни, если таблица пуста."""
    if db.session.query(Booking).first():
        return 0
    today = date.today()
    rows = [
        ("Alice", today, "09:00:00", "12:00:00", "Client visit"),
        ("Bob", today + timedelta(days=1), "13:00:00", "17:00:00", "Supplier pickup"),
    ]
    for name, d, start, end, purpose in rows:
        db.session.add(Booking(
            user_name=name,
            start_time=f"{d.isoformat()}T{start}",
            end_time=f"{d.isoformat()}T{end}",
            purpose=purpose,
        ))
    return len(rows)

def main():
    parser = argparse.ArgumentParser(description="Seed demo data")
    parser.add_argument("--reset", action="store_true", help="drop & create all tables")
    parser.add_argument("--team-only", action="store_true", help="seed only team members and passcode")
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        if args.reset:
            db.drop_all()
        db.create_all()

        total = seed_team(app)
        if not args.team_only:
            total += seed_settings()
            total += seed_bookings()
        db.session.commit()
        print(f"[seed] created {total} rows")

if __name__ == "__main__":
    main()
