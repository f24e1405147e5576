from enum import IntEnum


class OrderIn(IntEnum):
    ASC = 1
    DESC = 2


class TransportServiceType(IntEnum):
    BUS = 1
    MINIBUS = 2
    TAXI = 3
    TRAIN = 4


class RouteDirection(IntEnum):
    BIDIRECTIONAL = 1
    FORWARD = 2
    BACKWARD = 3


class Day(IntEnum):
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7
