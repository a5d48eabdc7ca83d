from __future__ import annotations

import logging

import discord
from discord.ext import commands, tasks
from dotenv import load_dotenv

from .commands import register_commands
from .config import Config, load_config
from .db import Database
from .reporter import Reporter
from .session import SessionController
from .store import EntryStore


def make_tick_loop(on_tick) -> tasks.Loop:
    """Wrap ``on_tick`` in a one-second discord.py loop."""

    @tasks.loop(seconds=1)
    async def tick_loop() -> None:
        # The loop fires immediately on start; the first tick belongs one second later.
        if tick_loop.current_loop == 0:
            return
        on_tick()

    return tick_loop


class StopwatchBot(commands.Bot):
    def __init__(self, config: Config, db: Database) -> None:
        intents = discord.Intents.none()
        intents.guilds = True

        super().__init__(command_prefix="!", intents=intents)

        self.config = config
        self.db = db
        self.logger = logging.getLogger("ticker-bot")

        self.store = EntryStore(db)
        self.session = SessionController(self.store, make_tick_loop, tz=config.timezone)
        self.reporter = Reporter(self.session)

    async def setup_hook(self) -> None:
        self.store.load()
        register_commands(self)
        await self.tree.sync(guild=discord.Object(id=self.config.guild_id))

    async def on_ready(self) -> None:
        self.logger.info("Connected as %s (%s)", self.user, self.user.id if self.user else "unknown")

    async def close(self) -> None:
        if self.session.running:
            # Record the run in progress instead of dropping it on shutdown.
            recorded = self.session.pause()
            if recorded is not None:
                self.logger.info("Recorded running session on shutdown: %ss", recorded.duration)
        self.db.close()
        await super().close()


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    load_dotenv()
    configure_logging()

    config = load_config()
    db = Database(config.database_path)
    db.initialize()

    bot = StopwatchBot(config=config, db=db)
    bot.run(config.discord_token)


if __name__ == "__main__":
    main()
