"""Initialize the parking reservation database."""
from parking_reservation.infrastructure.persistence.database import init_db

if __name__ == "__main__":
    init_db()
