#!/usr/bin/env python3
"""
Check the queue tables and today's token sequences.
Run with: python3 check_queue.py [YYYY-MM-DD]

Flags any doctor-clinic whose tokens for the day are not 1..N without gaps
or duplicates.
"""
import sys
from collections import defaultdict
from datetime import datetime

from sqlalchemy import inspect

from clinic_queue import create_app
from clinic_queue.extensions import db
from clinic_queue.models import Appointment, DoctorClinic
from clinic_queue.services.token_allocator import has_daily_token_guard
from clinic_queue.utils.time_utils import clinic_now

app = create_app()

with app.app_context():
    inspector = inspect(db.engine)

    print("=" * 60)
    print("QUEUE TABLES")
    print("=" * 60)

    for table_name in ('users', 'doctors', 'clinics', 'doctor_clinics', 'consulting_hours', 'appointments'):
        if table_name not in inspector.get_table_names():
            print(f"  ✗ {table_name:20} missing")
            continue
        count = db.session.execute(db.text(f"SELECT COUNT(*) FROM {table_name}")).scalar()
        print(f"  ✓ {table_name:20} : {count} row(s)")

    has_token_guard = has_daily_token_guard()
    print(f"\nDaily token unique constraint: {'present' if has_token_guard else 'MISSING'}")

    day = datetime.strptime(sys.argv[1], '%Y-%m-%d').date() if len(sys.argv) > 1 else clinic_now().date()

    print("\n" + "=" * 60)
    print(f"TOKEN SEQUENCES FOR {day.isoformat()}")
    print("=" * 60)

    tokens = defaultdict(list)
    for appointment in Appointment.query.filter_by(appointment_day=day).all():
        tokens[appointment.doctor_clinic_id].append(appointment.token_number)

    problems = 0
    for doctor_clinic in DoctorClinic.query.order_by(DoctorClinic.id).all():
        issued = sorted(tokens.get(doctor_clinic.id, []))
        expected = list(range(1, len(issued) + 1))
        ok = issued == expected
        problems += 0 if ok else 1
        marker = "✓" if ok else "✗"
        print(f"  {marker} doctor-clinic {doctor_clinic.id:4} issued={len(issued):3} "
              f"now serving #{doctor_clinic.current_token}")
        if not ok:
            print(f"      tokens: {issued}")

    print(f"\n{problems} doctor-clinic(s) with an irregular sequence")
