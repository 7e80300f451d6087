from portal.infrastructure import NotificationCenter


def test_notification_auto_dismisses(scheduler):
    center = NotificationCenter(scheduler=scheduler, timeout=3)
    center.show("1 file(s) added, 0 updated")

    current = center.current()
    assert current.message == "1 file(s) added, 0 updated"
    assert current.visible
    assert scheduler.timers[0].delay == 3

    scheduler.fire_all()
    assert not center.current().visible


def test_new_message_replaces_and_restarts_timer(scheduler):
    center = NotificationCenter(scheduler=scheduler, timeout=3)
    center.show("first")
    center.show("second")

    assert scheduler.timers[0].cancelled
    assert center.current().message == "second"

    # A stale callback must not hide the newer message.
    scheduler.timers[0].callback()
    assert center.current().visible

    scheduler.fire_all()
    assert not center.current().visible


def test_dismiss_early_cancels_timer(scheduler):
    center = NotificationCenter(scheduler=scheduler, timeout=3)
    center.show("saved")
    center.dismiss()

    assert not center.current().visible
    assert scheduler.timers[0].cancelled


def test_timeout_from_environment(scheduler, monkeypatch):
    monkeypatch.setenv("PORTAL_NOTIFICATION_TIMEOUT", "7.5")
    center = NotificationCenter(scheduler=scheduler)
    center.show("hello")
    assert scheduler.timers[0].delay == 7.5

    monkeypatch.setenv("PORTAL_NOTIFICATION_TIMEOUT", "soon")
    center.show("again")
    assert scheduler.timers[1].delay == 3.0


def test_reset_clears_notification(scheduler):
    center = NotificationCenter(scheduler=scheduler, timeout=3)
    assert center.current() is None
    center.show("hello")
    center.reset()
    assert center.current() is None
    assert scheduler.timers[0].cancelled
