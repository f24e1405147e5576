import argparse
from datetime import time

from app.src.enums import Day, RouteDirection, TransportServiceType
from app.src.db import (
    BusLane,
    BusRoute,
    BusSchedule,
    BusStop,
    File,
    Language,
    MapIcon,
    TransportService,
    Zone,
    sessionMaker,
    engine,
    ORMbase,
)


# ----------------------------------- Project Setup -------------------------------------------#
def removeTables():
    session = sessionMaker()
    ORMbase.metadata.drop_all(engine)
    session.commit()
    print("* All tables deleted")
    session.close()


def createTables():
    session = sessionMaker()
    ORMbase.metadata.create_all(engine)
    session.commit()
    print("* All tables created")
    session.close()


def initDB():
    session = sessionMaker()
    iconFile = File(
        url="/static/icons/bus.png",
        name="bus.png",
        type="image/png",
        size=2048,
    )
    stopPicture = File(
        url="/static/images/central_station.jpg",
        name="central_station.jpg",
        type="image/jpeg",
        size=184320,
    )
    session.add_all([iconFile, stopPicture])
    session.flush()

    busIcon = MapIcon(name=Language(en="Bus", ar="حافلة", ckb="پاس"), file_id=iconFile.id)
    session.add(busIcon)
    session.flush()

    service = TransportService(
        name=Language(en="City Bus", ar="حافلة المدينة", ckb="پاسی شار"),
        description=Language(en="Urban bus network"),
        type=TransportServiceType.BUS,
        color="#0066CC",
        icon_id=busIcon.id,
    )
    session.add(service)
    session.flush()

    downtown = Zone(
        name=Language(en="Downtown", ar="وسط المدينة", ckb="ناوەندی شار"),
        color="#FF6B6B",
    )
    university = Zone(
        name=Language(en="University District"),
        color="#4ECDC4",
    )
    session.add_all([downtown, university])
    session.flush()

    centralStation = BusStop(
        name=Language(en="Central Station", ar="المحطة المركزية", ckb="وێستگەی ناوەندی"),
        latitude=36.1911,
        longitude=44.0092,
        icon_id=busIcon.id,
        zone_id=downtown.id,
        has_shelter=True,
        has_bench=True,
        has_lighting=True,
        is_accessible=True,
        has_real_time_info=True,
        images=[stopPicture],
    )
    citadel = BusStop(
        name=Language(en="Citadel"),
        latitude=36.1914,
        longitude=44.0094,
        zone_id=downtown.id,
        has_bench=True,
    )
    campus = BusStop(
        name=Language(en="University Gate"),
        latitude=36.1450,
        longitude=44.0260,
        zone_id=university.id,
        has_shelter=True,
        is_accessible=True,
    )
    session.add_all([centralStation, citadel, campus])
    session.flush()

    northLane = BusLane(
        name=Language(en="Citadel Loop"),
        service_id=service.id,
        path=[[44.0092, 36.1911], [44.0093, 36.1912], [44.0094, 36.1914]],
        stops=[centralStation, citadel],
    )
    southLane = BusLane(
        name=Language(en="University Line"),
        service_id=service.id,
        color="#00A86B",
        path=[[44.0092, 36.1911], [44.0180, 36.1700], [44.0260, 36.1450]],
        stops=[centralStation, campus],
    )
    session.add_all([northLane, southLane])
    session.flush()

    route = BusRoute(
        name=Language(en="Citadel to University"),
        service_id=service.id,
        route_number="1A",
        direction=RouteDirection.BIDIRECTIONAL,
        lanes=[northLane, southLane],
        stops=[citadel, centralStation, campus],
    )
    session.add(route)
    session.flush()

    schedules = [
        BusSchedule(
            route_id=route.id,
            stop_id=stop.id,
            departure_time=time(hour, 0),
            day_of_week=day,
        )
        for stop in (citadel, centralStation)
        for hour in (7, 12, 17)
        for day in (Day.SUNDAY, Day.MONDAY, Day.TUESDAY, Day.WEDNESDAY, Day.THURSDAY)
    ]
    session.add_all(schedules)
    session.flush()

    session.commit()
    print("* Initialization completed")
    session.close()


# Setup database
if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    # remove tables
    parser.add_argument("-rm", action="store_true", help="remove tables")
    parser.add_argument("-cr", action="store_true", help="create tables")
    parser.add_argument("-init", action="store_true", help="initialize DB")
    args = parser.parse_args()

    if args.cr:
        createTables()
    if args.init:
        initDB()
    if args.rm:
        removeTables()
