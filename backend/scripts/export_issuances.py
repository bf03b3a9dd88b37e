#!/usr/bin/env python3
"""
Export the issuance audit trail to CSV for backup purposes.
Usage: python -m scripts.export_issuances [--property-number NUMBER] [--permanent-only] [--output FILE]
"""

import csv
import sys
import os
from datetime import datetime

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session
from ird_properties.core.database import SessionLocal
from ird_properties.models.issuance import Issuance
from ird_properties.models.property import Property

COLUMNS = [
    'id',
    'request_id',
    'property_id',
    'property_number',
    'property_name',
    'model_number',
    'model_19_number',
    'model_22_number',
    'serial_number',
    'property_type',
    'is_permanent',
    'quantity_type',
    'issued_quantity',
    'user_name',
    'user_department',
    'store_manager_name',
    'issued_at',
]


def export_issuances_to_csv(
    db: Session,
    property_number: str = None,
    permanent_only: bool = False,
    output_file: str = None
) -> str:
    """
    Export issuance records to a CSV file.

    Args:
        db: Database session
        property_number: Optional property number to filter by
        permanent_only: Only export issuances of permanent items
        output_file: Output file path (auto-generated if not provided)

    Returns:
        Path to the generated CSV file, or None if there was nothing to export
    """
    query = db.query(Issuance)
    if property_number:
        query = query.filter(Issuance.property_number == property_number)
    if permanent_only:
        query = query.filter(Issuance.is_permanent == True)

    issuances = query.order_by(Issuance.issued_at, Issuance.id).all()

    if not issuances:
        print("No issuances found" + (f" for property number '{property_number}'" if property_number else ""))
        return None

    if not output_file:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        suffix = f"_{property_number}" if property_number else "_all"
        output_file = f"issuance_export{suffix}_{timestamp}.csv"

    with open(output_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=COLUMNS)
        writer.writeheader()

        for issuance in issuances:
            row = {column: getattr(issuance, column) for column in COLUMNS}
            row['property_id'] = issuance.property_id or ''
            row['model_19_number'] = issuance.model_19_number or ''
            row['model_22_number'] = issuance.model_22_number or ''
            row['issued_at'] = issuance.issued_at.isoformat() if issuance.issued_at else ''
            writer.writerow(row)

    print(f"Exported {len(issuances)} issuances to {output_file}")
    return output_file


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Export issuance records to CSV')
    parser.add_argument('--property-number', '-p', help='Property number to filter by')
    parser.add_argument('--permanent-only', action='store_true', help='Only permanent issuances')
    parser.add_argument('--output', '-o', help='Output CSV file path')
    parser.add_argument('--list-properties', '-l', action='store_true', help='List all properties')

    args = parser.parse_args()

    db = SessionLocal()
    try:
        if args.list_properties:
            properties = db.query(Property).order_by(Property.number).all()
            print("\nProperties:")
            print("-" * 40)
            for prop in properties:
                print(f"  {prop.number}: {prop.name} ({prop.available_quantity}/{prop.quantity} available)")
            print()
            return

        export_issuances_to_csv(
            db,
            property_number=args.property_number,
            permanent_only=args.permanent_only,
            output_file=args.output
        )
    finally:
        db.close()


if __name__ == '__main__':
    main()
