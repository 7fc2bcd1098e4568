# src/sourcebit_sample/plugins/sample/plugin.py
"""Sample source plugin.

Owns two mock person records (John and Jane Doe) with a points counter and
publishes them as normalized objects. With the `watch` option enabled it
awards a point to a random person every few seconds and asks the host to
re-run the transform chain, the way a real source plugin would poll an API
for changes.
"""

import random
from typing import Any

from pydantic import Field

from sourcebit_sample.contracts import (
    Answers,
    DataObject,
    Entry,
    ModelDescriptor,
    PluginState,
    Question,
)
from sourcebit_sample.core.options import OptionSpec
from sourcebit_sample.core.scheduler import PeriodicTask
from sourcebit_sample.plugins.base import BasePlugin, SetupStep
from sourcebit_sample.plugins.config_base import PluginConfig
from sourcebit_sample.plugins.context import PluginContext, SetupContext

PLUGIN_NAME = "sourcebit-sample-plugin"

WATCH_INTERVAL_SECONDS = 3.0
MAX_STARTING_POINTS_FOR_JOHN = 15

FIELD_NAMES = ("firstName", "lastName", "points")

JOHN_ID = "123456"
JANE_ID = "654321"


class SampleOptions(PluginConfig):
    """Typed view of the sample plugin's resolved options."""

    my_secret: str | None = Field(default=None, alias="mySecret")
    watch: bool = False
    points_for_jane: int = Field(default=0, alias="pointsForJane")
    points_for_john: int = Field(default=0, alias="pointsForJohn")


class SamplePlugin(BasePlugin):
    """Mock source producing two people with a points counter.

    Options:
        mySecret: Read from MY_SECRET only; stored in .env by setup. Unused.
        watch: Award points periodically (runtime parameter: watch)
        pointsForJane: Jane's starting points (default: 0)
        pointsForJohn: John's starting points (default: 0)
    """

    name = PLUGIN_NAME
    plugin_version = "1.0.0"
    options_schema = {
        "mySecret": OptionSpec(env="MY_SECRET", private=True),
        "watch": OptionSpec(default=False, runtime_parameter="watch"),
        "pointsForJane": OptionSpec(default=0),
        "pointsForJohn": OptionSpec(default=0),
    }

    def __init__(
        self,
        options: dict[str, Any],
        *,
        rng: random.Random | None = None,
        interval_seconds: float = WATCH_INTERVAL_SECONDS,
    ) -> None:
        super().__init__(options)
        self._options = SampleOptions.from_dict(options)
        self._rng = rng or random.Random()
        self._interval_seconds = interval_seconds
        self._watcher: PeriodicTask | None = None

    def bootstrap(self, ctx: PluginContext) -> PeriodicTask | None:
        """Load entries from the cache, or generate them on first run.

        Returns:
            The running watch task when `watch` is enabled, else None.
        """
        state = PluginState.from_dict(ctx.get_plugin_context())

        if state is not None and state.entries:
            ctx.log(f"Loaded {len(state.entries)} entries from cache")
        else:
            state = PluginState(
                entries=[
                    Entry(
                        id=JOHN_ID,
                        fields={
                            "firstName": "John",
                            "lastName": "Doe",
                            "points": self._options.points_for_john,
                        },
                    ),
                    Entry(
                        id=JANE_ID,
                        fields={
                            "firstName": "Jane",
                            "lastName": "Doe",
                            "points": self._options.points_for_jane,
                        },
                    ),
                ]
            )
            ctx.log(f"Generated {len(state.entries)} entries")
            ctx.set_plugin_context(state.to_dict())

        if self._options.watch:
            self._watcher = PeriodicTask(
                self._interval_seconds,
                lambda: self.award_point(ctx),
                name=f"{self.name}-watch",
            ).start()

        return self._watcher

    def award_point(self, ctx: PluginContext) -> None:
        """Give one point to a randomly chosen entry, then request a refresh."""
        state = PluginState.from_dict(ctx.get_plugin_context())
        if state is None or not state.entries:
            return

        index = self._rng.randrange(len(state.entries))
        entry = state.entries[index]
        current_points = entry.fields["points"]
        entry.fields["points"] = current_points + 1

        ctx.log(
            f"Updated entry #{index}: {current_points} points -> "
            f"{entry.fields['points']} points"
        )
        ctx.set_plugin_context(state.to_dict())
        ctx.refresh()

    def transform(self, data: DataObject, ctx: PluginContext) -> DataObject:
        """Append the model descriptor and one normalized object per entry."""
        state = PluginState.from_dict(ctx.get_plugin_context())
        entries = state.entries if state is not None else []

        model = self.model_descriptor().to_dict()
        normalized = [
            {**entry.fields, "id": entry.id, "__metadata": model} for entry in entries
        ]

        return {
            **data,
            "models": [*data["models"], model],
            "objects": [*data["objects"], *normalized],
        }

    def model_descriptor(self) -> ModelDescriptor:
        return ModelDescriptor(
            source=self.name,
            model_name="sample-data",
            model_label="Mock data",
            project_id="12345",
            project_environment="master",
            field_names=FIELD_NAMES,
        )

    def close(self) -> None:
        """Stop the watch task, if any."""
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None

    # === Setup Hooks ===

    @classmethod
    def get_setup(cls, ctx: SetupContext) -> SetupStep:
        questions: list[Question] = [
            {
                "type": "number",
                "name": "pointsForJane",
                "message": "How many points should Jane start with?",
            },
            {
                "type": "number",
                "name": "pointsForJohn",
                "message": "How many points should John start with?",
            },
        ]

        def run() -> Answers:
            spinner = ctx.spinner("Crunching some numbers...").start()
            # A real plugin would fetch something here (e.g. a list of projects)
            spinner.succeed()
            return ctx.prompt(questions)

        return run

    @classmethod
    def get_options_from_setup(cls, answers: Answers, ctx: SetupContext) -> dict[str, Any]:
        """Keep Jane's points as given; cap John's at 15."""
        return {
            "pointsForJane": answers["pointsForJane"],
            "pointsForJohn": min(answers["pointsForJohn"], MAX_STARTING_POINTS_FOR_JOHN),
        }
