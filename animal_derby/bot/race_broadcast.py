import asyncio
from typing import Dict, List, Optional

import discord
from discord import app_commands
from discord.ext import commands

from animal_derby.config import get_config
from animal_derby.engine import RaceSession, RaceStatus, TickSnapshot, TOTAL_RACE_TIME
from animal_derby.engine.race_loop import OPENING_RACE_MULTIPLIER, TRACK_WIDTH_PCT

BAR_WIDTH = int(get_config("display.bar_width", 20))
REFRESH_SECONDS = float(get_config("discord.race_refresh_seconds", 1.0))
READY_DELAY_SECONDS = float(get_config("race.ready_delay_seconds", 2.0))


def render_track_board(snapshot: TickSnapshot, bar_width: int = BAR_WIDTH) -> str:
    """Text lanes, one per animal, in roster order."""
    lines = []
    for lane, racer in enumerate(snapshot.racers, start=1):
        progress = min(max(racer.position_pct / TRACK_WIDTH_PCT, 0.0), 1.0)
        filled = int(progress * bar_width)
        bar = "=" * filled + "." * (bar_width - filled)
        if racer.finished and racer.finish_time is not None:
            reading = f"{racer.finish_time:.1f}s"
        else:
            reading = f"{racer.distance}m"
        lines.append(f"{lane:>2} {racer.emoji} {racer.name[:8]:<8} [{bar}] {reading:>6}")
    return "\n".join(lines) if lines else "No runners found."


def render_race_snapshot(
    title: str,
    snapshot: TickSnapshot,
    events: List[str],
    target_distance: Optional[float] = None,
) -> discord.Embed:
    if snapshot.status is RaceStatus.FINISHED:
        color = discord.Color.green()
        clock_text = "Finished!"
    else:
        color = discord.Color.gold()
        clock_text = f"{min(snapshot.time, TOTAL_RACE_TIME):.1f}s"
    embed = discord.Embed(title=f"{title} — {clock_text}", color=color)
    if target_distance is not None:
        embed.description = f"🏁 Finish line at **{int(target_distance)}m**"

    board_value = f"```text\n{render_track_board(snapshot)}\n```"
    if len(board_value) > 1024:
        board_value = board_value[:1010] + "\n...```"
    embed.add_field(name="Track", value=board_value, inline=False)

    if events:
        events_text = "\n".join(f"• {text}" for text in events[-6:])
    else:
        events_text = "Everyone is running hard!"
    if len(events_text) > 1024:
        events_text = events_text[:1021] + "..."
    embed.add_field(name="Highlights", value=events_text, inline=False)
    embed.set_footer(text="speed = distance ÷ time")
    return embed


def describe_cues(snapshot: TickSnapshot) -> List[str]:
    texts = []
    for racer in snapshot.racers:
        for cue in racer.cues:
            sfx = f" {cue.sfx}" if cue.sfx else ""
            texts.append(f"{racer.emoji} {racer.name}: \"{cue.bubble}\"{sfx}")
    return texts


async def play_race(
    message: discord.Message,
    session: RaceSession,
    title: str,
    refresh_seconds: float = REFRESH_SECONDS,
) -> TickSnapshot:
    """Runs ``session`` to the end, editing ``message`` once per refresh."""
    events: List[str] = []
    session.start()
    snapshot = session.tick()
    while True:
        events.extend(describe_cues(snapshot))
        embed = render_race_snapshot(title, snapshot, events, session.target_distance)
        try:
            await message.edit(content=None, embed=embed)
        except discord.HTTPException as err:
            print(f"[RaceBroadcast] Failed to edit race message {message.id}: {err}")
        if snapshot.status is RaceStatus.FINISHED:
            return snapshot
        await asyncio.sleep(refresh_seconds)
        snapshot = session.tick()


class RaceBroadcastCog(commands.Cog):
    """Plays the opening race: everybody runs the full 20 seconds."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot
        self.playback_tasks: Dict[int, asyncio.Task] = {}

    async def cog_unload(self):
        for task in list(self.playback_tasks.values()):
            task.cancel()

    def cancel_playback(self, channel_id: int) -> bool:
        task = self.playback_tasks.pop(channel_id, None)
        if task and not task.done():
            task.cancel()
            return True
        return False

    async def playback_race(self, message: discord.Message):
        try:
            await asyncio.sleep(READY_DELAY_SECONDS)
            session = RaceSession(speed_multiplier=OPENING_RACE_MULTIPLIER)
            await play_race(message, session, "🏁 The Big Race")
            embed = discord.Embed(
                title="🏆 Race over!",
                description=(
                    "What a close race!\n"
                    "So who was really the fastest?\n\n"
                    "Compare them fairly with `/time_match`, `/distance_match` or `/all_records`."
                ),
                color=discord.Color.green(),
            )
            await message.channel.send(embed=embed)
        except asyncio.CancelledError:
            pass
        except Exception as err:
            print(f"[RaceBroadcast] Playback error in channel {message.channel.id}: {err}")

    @app_commands.command(name="race", description="Watch all the animals race for 20 seconds.")
    async def race(self, interaction: discord.Interaction):
        channel_id = interaction.channel_id or 0
        if self.cancel_playback(channel_id):
            print(f"[RaceBroadcast] Restarting race in channel {channel_id}")

        ready = discord.Embed(title="Ready...", description="# 🏁 Get set!", color=discord.Color.yellow())
        await interaction.response.send_message(embed=ready)
        message = await interaction.original_response()

        task = self.bot.loop.create_task(self.playback_race(message))
        self.playback_tasks[channel_id] = task


async def setup(bot: commands.Bot):
    await bot.add_cog(RaceBroadcastCog(bot))
    print("RaceBroadcastCog cog loaded.")
