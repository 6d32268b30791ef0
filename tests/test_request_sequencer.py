from booking.services.availability.request_sequencer import RequestSequencer


class TestRequestSequencer:
    """Only the newest request per client counts as current."""

    def test_newer_request_makes_older_stale(self):
        """Test a result for seq 1 is stale once seq 2 was observed."""
        sequencer = RequestSequencer()
        sequencer.observe("client-a", 1)
        sequencer.observe("client-a", 2)

        assert not sequencer.is_latest("client-a", 1)
        assert sequencer.is_latest("client-a", 2)

    def test_late_arrival_of_older_request(self):
        """Test observing an older seq after a newer one keeps the newer as latest."""
        sequencer = RequestSequencer()
        sequencer.observe("client-a", 5)
        sequencer.observe("client-a", 3)

        assert not sequencer.is_latest("client-a", 3)
        assert sequencer.is_latest("client-a", 5)

    def test_auto_assigned_sequence(self):
        """Test omitted sequence numbers are assigned incrementally."""
        sequencer = RequestSequencer()
        first = sequencer.observe("client-a")
        second = sequencer.observe("client-a")

        assert (first, second) == (1, 2)
        assert not sequencer.is_latest("client-a", first)

    def test_clients_are_independent(self):
        """Test one client's requests never make another's stale."""
        sequencer = RequestSequencer()
        sequencer.observe("client-a", 10)
        sequencer.observe("client-b", 1)

        assert sequencer.is_latest("client-b", 1)
        assert sequencer.is_latest("client-a", 10)

    def test_forget(self):
        """Test forgetting a client resets its history."""
        sequencer = RequestSequencer()
        sequencer.observe("client-a", 4)
        sequencer.forget("client-a")

        assert sequencer.is_latest("client-a", 1)


class FakeClock:

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestRequestSequencerEviction:
    """The client table stays bounded."""

    def test_idle_clients_expire(self):
        """Test clients not seen for the TTL are dropped at the next cleanup."""
        clock = FakeClock()
        sequencer = RequestSequencer(ttl_seconds=600, cleanup_interval=60, clock=clock)
        for i in range(1000):
            sequencer.observe(f"client-{i}", 1)
        assert len(sequencer) == 1000

        clock.now = 601
        sequencer.observe("client-new", 1)

        assert len(sequencer) == 1
        assert sequencer.is_latest("client-new", 1)

    def test_active_client_is_kept(self):
        """Test a client seen within the TTL survives cleanup with its sequence."""
        clock = FakeClock()
        sequencer = RequestSequencer(ttl_seconds=600, cleanup_interval=60, clock=clock)
        sequencer.observe("client-a", 1)
        sequencer.observe("client-b", 1)

        clock.now = 500
        sequencer.observe("client-a", 4)
        clock.now = 700
        sequencer.observe("client-c", 1)

        assert len(sequencer) == 2
        assert not sequencer.is_latest("client-a", 3)

    def test_expired_client_starts_over(self):
        """Test an expired client's old sequence no longer marks new requests stale."""
        clock = FakeClock()
        sequencer = RequestSequencer(ttl_seconds=600, clock=clock)
        sequencer.observe("client-a", 9)

        clock.now = 601
        assert sequencer.is_latest("client-a", 1)

    def test_size_is_capped(self):
        """Test rotating client keys never grows the table past the cap."""
        sequencer = RequestSequencer(max_clients=100)
        for i in range(10000):
            sequencer.observe(f"client-{i}", 1)

        assert len(sequencer) == 100
        assert sequencer.is_latest("client-9999", 1)

    def test_cap_evicts_least_recently_seen(self):
        """Test the oldest client goes first when the table is full."""
        sequencer = RequestSequencer(max_clients=2)
        sequencer.observe("client-a", 5)
        sequencer.observe("client-b", 5)
        sequencer.observe("client-a", 6)
        sequencer.observe("client-c", 5)

        assert not sequencer.is_latest("client-a", 5)
        assert sequencer.is_latest("client-b", 1)
