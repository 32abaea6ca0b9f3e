# prayertools/utils/constants.py

class Roles:
    """
    Defines the role names used throughout the application.
    Using a class like this prevents typos and makes the code more maintainable,
    as all role names are defined in a single, central location.
    """
    ADMIN = 'admin'
    STAFF = 'staff'
    USER = 'user'


class NotificationTypes:
    GENERAL = 'general'
    PRAYER_REMINDER = 'prayer_reminder'
    EVENT = 'event'
    SYSTEM = 'system'

    ALL = (GENERAL, PRAYER_REMINDER, EVENT, SYSTEM)


class TargetAudience:
    ALL_USERS = 'all'
    USERS = 'users'
    SPECIFIC = 'specific'

    ALL = (ALL_USERS, USERS, SPECIFIC)


# GeoJSON geometry type accepted for mosque locations.
POINT = 'Point'
