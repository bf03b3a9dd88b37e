"""
Seed script for the IRD Property Management System
Creates the default admin, requester and store manager accounts plus a small catalog
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ird_properties.core.database import SessionLocal, engine, Base
from ird_properties.core.security import get_password_hash
from ird_properties.models.user import User, UserRole
from ird_properties.models.property import PropertyType
from ird_properties.services.ledger import InventoryLedger


def seed_data():
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if data already exists
        if db.query(User).first():
            print("Data already seeded. Skipping...")
            return

        # Create Users
        print("Creating users...")
        users = [
            User(
                username="admin",
                hashed_password=get_password_hash("admin123"),
                name="Administrator",
                role=UserRole.ADMIN.value,
                department="Property Office",
                email="admin@eduird.et",
            ),
            User(
                username="user",
                hashed_password=get_password_hash("user123"),
                name="Sidrak H.",
                role=UserRole.USER.value,
                department="ADRD",
                email="user@eduird.et",
            ),
            User(
                username="store",
                hashed_password=get_password_hash("store123"),
                name="Store Manager",
                role=UserRole.STORE_MANAGER.value,
                department="Store Department",
                email="store@eduird.et",
            ),
        ]
        for user in users:
            db.add(user)
        db.commit()

        # Register catalog through the ledger so availability starts at the full quantity
        print("Creating properties...")
        ledger = InventoryLedger(db)
        catalog = [
            dict(number="IRD-0001", name="Laptop Computer", model_number="HP ProBook 450",
                 model_19_number="M19-0001", serial_number="5CD1234XYZ", date="2024-01-15",
                 company_name="Tech Supplies PLC", measurement="pcs", quantity=10,
                 unit_price=45000.0, property_type=PropertyType.PERMANENT),
            dict(number="IRD-0002", name="Office Chair", model_number="OC-220",
                 serial_number="OC220-2024", date="2024-02-01", company_name="Addis Furniture",
                 measurement="pcs", quantity=25, unit_price=3500.0,
                 property_type=PropertyType.PERMANENT_TEMPORARY),
            dict(number="IRD-0003", name="A4 Paper", model_number="80gsm",
                 serial_number="N/A", date="2024-03-10", company_name="Stationery Hub",
                 measurement="ream", quantity=200, unit_price=450.0,
                 property_type=PropertyType.TEMPORARY),
        ]
        for fields in catalog:
            ledger.register(**fields)
        db.commit()

        print("\n=== SEED DATA COMPLETE ===")
        print(f"Created {len(users)} users")
        print(f"Created {len(catalog)} properties")
        print("\n=== LOGIN CREDENTIALS ===")
        print("Admin: admin / admin123")
        print("Requester: user / user123")
        print("Store Manager: store / store123")

    except Exception as e:
        print(f"Error seeding data: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
