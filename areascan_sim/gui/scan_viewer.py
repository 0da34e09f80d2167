"""
Copyright (c) 2025 Pablo Ramirez Escudero

This software is released under the MIT License.
https://opensource.org/licenses/MIT
"""

from matplotlib import pyplot as plt
from matplotlib.backend_bases import MouseButton
from matplotlib.widgets import Button, RadioButtons, TextBox

from ..core import AppState, ScanConfig, ScanController, ScanSession, ScanState
from ..errors import LookupFailed
from ..lookup import Place, PlaceLookup
from ..utils.logger import create_logger
from .matplotlib_surface import MatplotlibFrameScheduler, MatplotlibMapSurface


class ScanViewer:
    """
    Interactive figure: click two corners on the map to start a scan.

    The side panel holds the place search box, the agent count selector,
    the reset button and the active agents counter.
    """

    def __init__(
        self,
        config: ScanConfig = None,
        fig_size: tuple[float, float] = (12, 7),
        lookup: PlaceLookup = None,
    ) -> None:
        self.config = config if config is not None else ScanConfig()
        self.lookup = lookup if lookup is not None else PlaceLookup()

        self.fig = plt.figure(figsize=fig_size)
        self.ax = self.fig.add_axes([0.06, 0.08, 0.66, 0.86])
        self.surface = MatplotlibMapSurface(self.ax)
        self.scheduler = MatplotlibFrameScheduler(self.fig, self.config.fps)
        self.controller = ScanController(self.surface, self.scheduler, self.config)

        self.search_marker: int = None
        self.search_message: int = None
        self.suggestions: list[Place] = []
        self._suggest_timer = None
        self.agent_labels = [
            f"{i} Drone{'s' if i > 1 else ''}"
            for i in range(self.config.min_agents, self.config.max_agents + 1)
        ]

        self.logger = create_logger(name="ScanViewer", level="INFO")

        self._create_widgets()
        self.controller.add_state_listener(self._on_state_changed)
        self.controller.add_alert_listener(self._set_status)
        self.controller.add_frame_listener(self._on_frame)
        self.fig.canvas.mpl_connect("button_press_event", self._on_click)
        self.fig.canvas.mpl_connect("pick_event", self._on_pick)

        self.reset()

    def show(self) -> None:
        plt.show()

    def reset(self) -> None:
        self.controller.reset()
        self.search_marker = None
        self.search_message = None
        self._cancel_suggestions()
        self._set_search_text("")
        self._hide_suggestions()
        self.agent_selector.set_active(
            self.config.default_agents - self.config.min_agents
        )
        self._set_status("Click two corners to select the scan area")

    def _create_widgets(self) -> None:
        search_ax = self.fig.add_axes([0.76, 0.86, 0.2, 0.05])
        self.search_box = TextBox(search_ax, "", initial="")
        self.search_box.on_submit(self._on_search)
        self.search_box.on_text_change(self._on_search_text_changed)
        self.fig.text(0.76, 0.92, "Search place")

        self.suggestion_texts = [
            self.fig.text(0.76, 0.83 - 0.03 * i, "", va="top", fontsize=8, picker=True)
            for i in range(self.lookup.limit)
        ]

        selector_ax = self.fig.add_axes([0.76, 0.42, 0.2, 0.25])
        selector_ax.set_title("Agents", fontsize=10)
        self.agent_selector = RadioButtons(selector_ax, self.agent_labels)
        self.agent_selector.on_clicked(self._on_agents_selected)

        reset_ax = self.fig.add_axes([0.76, 0.32, 0.2, 0.06])
        self.reset_button = Button(reset_ax, "Reset")
        self.reset_button.on_clicked(lambda event: self.reset())

        self.counter_text = self.fig.text(0.76, 0.26, "", fontsize=11)
        self.status_text = self.fig.text(0.76, 0.2, "", fontsize=9, wrap=True)

    def _on_click(self, event) -> None:
        if event.inaxes is not self.ax or event.button != MouseButton.LEFT:
            return
        toolbar = self.fig.canvas.toolbar
        if toolbar is not None and toolbar.mode != "":
            return  # panning or zooming
        self._hide_suggestions()
        self.controller.click(event.ydata, event.xdata)

    def _on_agents_selected(self, label: str) -> None:
        count = self.agent_labels.index(label) + self.config.min_agents
        self.controller.select_agent_count(count)

    def _on_search(self, text: str) -> None:
        self._cancel_suggestions()
        self._hide_suggestions()
        try:
            place = self.lookup.search(text)
        except ValueError as e:
            self._set_status(str(e))
            return
        except LookupFailed as e:
            self.logger.warning(str(e))
            self._set_status("Search failed")
            return
        if place is None:
            self._set_status("Place not found")
            return
        self._select_place(place)

    def _on_search_text_changed(self, text: str) -> None:
        self._cancel_suggestions()
        timer = self.fig.canvas.new_timer(interval=self.config.suggest_delay_ms)
        timer.single_shot = True
        timer.add_callback(self.refresh_suggestions, text)
        self._suggest_timer = timer
        timer.start()

    def _cancel_suggestions(self) -> None:
        if self._suggest_timer is not None:
            self._suggest_timer.stop()
            self._suggest_timer = None

    def refresh_suggestions(self, query: str) -> None:
        """
        Lists autocomplete candidates for `query` below the search box.
        Queries shorter than the lookup minimum length clear the list.
        """
        self._suggest_timer = None
        self.suggestions = self.lookup.suggestions(query)
        for i, text in enumerate(self.suggestion_texts):
            label = self.suggestions[i].label if i < len(self.suggestions) else ""
            text.set_text(f"{i + 1}. {label[:40]}" if label else "")
        self.fig.canvas.draw_idle()

    def select_suggestion(self, index: int) -> None:
        place = self.suggestions[index]
        self._set_search_text(place.label)
        self._hide_suggestions()
        self._select_place(place)

    def _hide_suggestions(self) -> None:
        self.suggestions = []
        for text in self.suggestion_texts:
            text.set_text("")

    def _set_search_text(self, text: str) -> None:
        self.search_box.eventson = False
        try:
            self.search_box.set_val(text)
        finally:
            self.search_box.eventson = True

    def _on_pick(self, event) -> None:
        if event.artist not in self.suggestion_texts:
            return
        index = self.suggestion_texts.index(event.artist)
        if index < len(self.suggestions):
            self.select_suggestion(index)

    def _select_place(self, place: Place) -> None:
        if self.search_marker is not None:
            self.surface.remove_marker(self.search_marker)
        if self.search_message is not None:
            self.surface.remove_overlay_message(self.search_message)
        self.search_marker = self.surface.add_marker(
            place.position, "black", size=8.0, title=place.label
        )
        self.search_message = self.surface.show_overlay_message(
            place.label.split(",")[0], place.position
        )
        span = self.config.search_span
        self.surface.set_view(place.position, (span, span))
        self.surface.render(self.controller.renderer)
        self._set_status(f"Centered on {place.label[:40]}")

    def _on_frame(self, session: ScanSession) -> None:
        self._update_counter()

    def _update_counter(self) -> None:
        active, total = self.controller.active_agents
        self.counter_text.set_text(f"Active agents: {active}/{total}")

    def _on_state_changed(self, state: AppState) -> None:
        self._update_counter()
        if state.scan_state is ScanState.RUNNING:
            self._set_status("Scanning...")
        elif state.scan_state is ScanState.COMPLETED:
            self._set_status("Scan completed")
        elif state.gesture.click_count == 1:
            self._set_status("Click the opposite corner")
        self.fig.canvas.draw_idle()

    def _set_status(self, message: str) -> None:
        self.status_text.set_text(message)
        self.fig.canvas.draw_idle()
