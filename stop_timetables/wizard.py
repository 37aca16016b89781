"""Interactive stop selection."""

import logging
from collections.abc import Callable

from stop_timetables.gtfs.models import Feed, Stop
from stop_timetables.schedule.indexing import StopIndex, build_stop_index

logger = logging.getLogger(__name__)


class StopWizard:
    """Ask the user for stops until they decline to add another one."""

    def __init__(
        self,
        feed: Feed,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
        index: StopIndex | None = None,
    ) -> None:
        self.feed = feed
        self.input = input_func
        self.output = output_func
        self.index = index if index is not None else build_stop_index(feed)

    def run(self) -> list[Stop]:
        """Collect stops, one at a time, in the order they were chosen."""
        chosen: list[Stop] = []

        while True:
            chosen.append(self.read_stop())

            answer = self.input(
                f"Currently {len(chosen)} stop(s) have been chosen. "
                "Do you want to add another one? (y/n) "
            )
            if answer.strip().lower() != "y":
                break

        logger.info(f"Selected stops: {', '.join(stop.name for stop in chosen)}")
        return chosen

    def read_stop(self) -> Stop:
        """Let the user pick one stop among those matching a searched name."""
        while True:
            found = sorted(self.seek_stops(), key=lambda s: s.name)

            self.output(f"Found {len(found)} stops:")
            for i, stop in enumerate(found):
                self.output(f"{i}) {stop} -> {self.terminating_stop(stop)}")

            number = self._read_number("Please enter the number of stop you want to choose: ")
            if 0 <= number < len(found):
                return found[number]

            self.output("Wrong number! Try again.")

    def seek_stops(self) -> list[Stop]:
        """Return all stops whose name contains the entered text."""
        while True:
            text = self.input("Enter stop name: ").strip()
            found = [stop for stop in self.feed.stops.values() if text in stop.name]
            if found:
                return found

            self.output("No stop with such name (or similar) was found. Please try again.")

    def terminating_stop(self, stop: Stop) -> Stop:
        """Last stop of the last trip calling at stop, or stop itself."""
        visits = self.index.visits_for(stop.stop_id)
        if not visits:
            return stop

        last_stop_id = visits[-1].trip.stop_times[-1].stop_id
        return self.feed.stops.get(last_stop_id, stop)

    def _read_number(self, prompt: str) -> int:
        while True:
            try:
                return int(self.input(prompt).strip())
            except ValueError:
                self.output("Wrong number! Try again.")
