from datetime import datetime, timedelta, timezone

from zny_controllers import ControllerSession, WatchedPosition, active_controllers, has_center, time_online

WATCHED = [WatchedPosition("JFK_TWR"), WatchedPosition("NY_CTR"), WatchedPosition("EWR_GND")]


def test_no_match_is_empty():
    sessions = [ControllerSession("BOS_TWR"), ControllerSession("jfk_twr"), ControllerSession("JFK_TWR_1")]
    assert active_controllers(sessions, WATCHED) == []


def test_matches_sorted_by_callsign():
    sessions = [
        ControllerSession("NY_CTR", cid=3),
        ControllerSession("BOS_TWR", cid=9),
        ControllerSession("JFK_TWR", cid=1),
        ControllerSession("EWR_GND", cid=2),
    ]
    online = active_controllers(sessions, WATCHED)
    assert [s.callsign for s in online] == ["EWR_GND", "JFK_TWR", "NY_CTR"]


def test_has_center():
    assert has_center([ControllerSession("JFK_TWR"), ControllerSession("NY_CTR")])
    assert not has_center([ControllerSession("JFK_TWR"), ControllerSession("NY_CTR_OBS")])
    assert not has_center([])


def test_time_online():
    now = datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)
    s = ControllerSession("JFK_TWR", logon_time=now - timedelta(hours=1, minutes=5, seconds=30))
    assert time_online(s, now) == "1:05"
    s = ControllerSession("JFK_TWR", logon_time=now - timedelta(minutes=7))
    assert time_online(s, now) == "0:07"
    assert time_online(ControllerSession("JFK_TWR"), now) == "0:00"
