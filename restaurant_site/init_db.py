import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from .models import (
    ContactInfo,
    FloorPlanElement,
    MenuCategory,
    MenuItem,
    OpeningHours,
    RestaurantLocation,
    SystemSetting,
    Table,
)

logger = logging.getLogger(__name__)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def seed_demo_data(db: Session) -> bool:
    """Fill an empty database with a demo restaurant.

    Returns False without touching anything when a location already exists.
    """
    if db.query(RestaurantLocation).first():
        logger.info("Database already seeded. Skipping...")
        return False

    try:
        # Dining areas, in display order
        locations = [
            RestaurantLocation(name="Main Dining", description="Our main dining room", display_order=1),
            RestaurantLocation(name="Patio", description="Outdoor seating, weather permitting", display_order=2),
            RestaurantLocation(name="Bar", description="High-tops around the bar", display_order=3),
        ]
        db.add_all(locations)
        db.flush()
        main_dining, patio, bar = locations

        tables = [
            # Main Dining: two 2-tops, two 4-tops, one large round
            Table(name="Table 1", capacity=2, min_capacity=1, max_capacity=2, location_id=main_dining.id,
                  shape="square", x_position=60, y_position=60),
            Table(name="Table 2", capacity=2, min_capacity=1, max_capacity=2, location_id=main_dining.id,
                  shape="square", x_position=160, y_position=60),
            Table(name="Table 3", capacity=4, min_capacity=2, max_capacity=4, location_id=main_dining.id,
                  shape="round", x_position=60, y_position=180, width=80, height=80),
            Table(name="Table 4", capacity=4, min_capacity=2, max_capacity=4, location_id=main_dining.id,
                  shape="round", x_position=180, y_position=180, width=80, height=80),
            Table(name="Table 5", capacity=8, min_capacity=4, max_capacity=10, location_id=main_dining.id,
                  shape="rectangular", table_type="private", x_position=320, y_position=120,
                  width=160, height=80, is_premium=True),
            # Patio
            Table(name="Patio 1", capacity=4, min_capacity=2, max_capacity=4, location_id=patio.id,
                  table_type="outdoor", x_position=60, y_position=60),
            Table(name="Patio 2", capacity=6, min_capacity=2, max_capacity=6, location_id=patio.id,
                  table_type="outdoor", shape="rectangular", x_position=180, y_position=60,
                  width=120, height=60),
            # Bar
            Table(name="Bar 1", capacity=2, min_capacity=1, max_capacity=2, location_id=bar.id,
                  table_type="high-top", x_position=40, y_position=140, width=40, height=40),
            Table(name="Bar 2", capacity=2, min_capacity=1, max_capacity=2, location_id=bar.id,
                  table_type="high-top", x_position=100, y_position=140, width=40, height=40),
        ]
        db.add_all(tables)

        db.add_all([
            FloorPlanElement(location_id=main_dining.id, element_type="kitchen", name="Kitchen",
                             x_position=500, y_position=0, width=150, height=120),
            FloorPlanElement(location_id=main_dining.id, element_type="door", name="Entrance",
                             x_position=0, y_position=300, width=60, height=10),
            FloorPlanElement(location_id=main_dining.id, element_type="restroom", name="Restrooms",
                             x_position=500, y_position=260, width=80, height=80),
            FloorPlanElement(location_id=bar.id, element_type="bar", name="Bar Counter",
                             x_position=20, y_position=20, width=260, height=60),
        ])

        starters = MenuCategory(name="Starters", display_order=1)
        mains = MenuCategory(name="Mains", display_order=2)
        desserts = MenuCategory(name="Desserts", display_order=3)
        db.add_all([starters, mains, desserts])
        db.flush()

        db.add_all([
            MenuItem(category_id=starters.id, name="Soup of the Day", description="Ask your server",
                     price=Decimal("6.50"), display_order=1),
            MenuItem(category_id=starters.id, name="Bruschetta", description="Tomato, basil and garlic on toasted bread",
                     price=Decimal("7.00"), display_order=2),
            MenuItem(category_id=mains.id, name="Grilled Salmon", description="With seasonal vegetables",
                     price=Decimal("18.50"), display_order=1),
            MenuItem(category_id=mains.id, name="Mushroom Risotto", description="Arborio rice, wild mushrooms, parmesan",
                     price=Decimal("15.00"), display_order=2),
            MenuItem(category_id=desserts.id, name="Tiramisu", description="House made",
                     price=Decimal("6.00"), display_order=1),
        ])

        for day, day_name in enumerate(DAY_NAMES):
            # closed on Mondays
            if day == 1:
                db.add(OpeningHours(day_of_week=day, day_name=day_name, is_closed=True))
            else:
                db.add(OpeningHours(day_of_week=day, day_name=day_name, open_time="17:00", close_time="22:00"))

        db.add_all([
            ContactInfo(type="phone", label="Reservations", value="+1 555 0100", display_order=1),
            ContactInfo(type="email", label="Email", value="hello@example.com", display_order=2),
            ContactInfo(type="address", label="Address", value="1 Harbour Street", display_order=3),
        ])

        db.add(SystemSetting(
            key="registration_enabled",
            value="true",
            description="Allow new admin accounts to register",
        ))

        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error seeding database")
        raise

    logger.info("Seeded %d locations and %d tables", len(locations), len(tables))
    return True


if __name__ == "__main__":
    from .config import Settings
    from .database import Database

    logging.basicConfig(level=logging.INFO)
    database = Database(Settings.from_env())
    database.init_db()
    with database.SessionLocal() as session:
        if seed_demo_data(session):
            print("✅ Database initialized successfully!")
        else:
            print("Database already initialized. Skipping...")
