import traceback
from typing import Dict, List, Optional

import discord
from discord import app_commands
from discord.ext import commands

from animal_derby.config import get_config
from animal_derby.engine import DEFAULT_ROSTER, RaceSession
from animal_derby.engine.data_models import Competitor
from animal_derby.engine.race_loop import DISTANCE_MATCH_MULTIPLIER
from animal_derby.game import (
    DISTANCE_OPTIONS,
    TIME_OPTIONS,
    AllRecordsRound,
    DistanceMatchRound,
    GameSession,
    QuizRound,
    RoundClosedError,
    TimeMatchRound,
)
from animal_derby.bot.race_broadcast import play_race, render_race_snapshot

VIEW_TIMEOUT_SECONDS = float(get_config("discord.view_timeout_seconds", 180))


def format_records_table(quiz: AllRecordsRound) -> str:
    header = "Animal      Time  Distance"
    lines = [header, "-" * len(header)]
    for record in quiz.records:
        competitor = record.competitor
        lines.append(f"{competitor.emoji} {competitor.name[:8]:<8} {record.time:>4}s {record.distance:>7}m")
    return "\n".join(lines)


def build_result_embed(competitor: Competitor, correct: bool, message: str, score: int) -> discord.Embed:
    if correct:
        embed = discord.Embed(title=f"{competitor.emoji} Ding dong! Correct!", description=message, color=discord.Color.green())
    else:
        embed = discord.Embed(title="🤔 So close!", description=message, color=discord.Color.red())
    embed.add_field(name="My score", value=f"⭐ {score}", inline=True)
    return embed


class AnimalGuessButton(discord.ui.Button):
    def __init__(self, competitor: Competitor):
        super().__init__(label=competitor.name, emoji=competitor.emoji, style=discord.ButtonStyle.secondary)
        self.competitor = competitor

    async def callback(self, interaction: discord.Interaction):
        await self.view.handle_guess(interaction, self.competitor)


class GuessView(discord.ui.View):
    def __init__(self, player_id: int, session: GameSession, quiz: QuizRound):
        super().__init__(timeout=VIEW_TIMEOUT_SECONDS)
        self.player_id = player_id
        self.session = session
        self.quiz = quiz
        self.message: Optional[discord.Message] = None
        for competitor in quiz.roster:
            self.add_item(AnimalGuessButton(competitor))

    def disable_all_items(self):
        for child in self.children:
            child.disabled = True

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.player_id:
            await interaction.response.send_message(
                "This quiz belongs to someone else. Start your own with `/derby_help`!",
                ephemeral=True,
            )
            return False
        return True

    async def on_timeout(self) -> None:
        self.disable_all_items()
        if self.message:
            try:
                await self.message.edit(view=self)
            except discord.HTTPException:
                pass

    async def handle_guess(self, interaction: discord.Interaction, competitor: Competitor):
        try:
            result = self.session.submit_guess(self.quiz, competitor.id)
        except RoundClosedError as err:
            await interaction.response.send_message(str(err), ephemeral=True)
            return

        embed = build_result_embed(competitor, result.correct, result.message, result.score)
        if result.correct:
            self.disable_all_items()
            self.stop()
            try:
                await interaction.response.edit_message(view=self)
            except discord.HTTPException:
                await interaction.response.defer()
            await interaction.followup.send(embed=embed, ephemeral=True)
        else:
            await interaction.response.send_message(embed=embed, ephemeral=True)


class QuizCommands(commands.Cog):
    """Cog containing the three comparison quizzes and the score board."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot
        self.sessions: Dict[int, GameSession] = {}

    def get_session(self, user_id: int) -> GameSession:
        session = self.sessions.get(user_id)
        if session is None:
            session = GameSession(player_id=str(user_id))
            self.sessions[user_id] = session
        return session

    async def _send_with_view(self, interaction: discord.Interaction, embed: discord.Embed, quiz: QuizRound):
        view = GuessView(interaction.user.id, self.get_session(interaction.user.id), quiz)
        view.message = await interaction.followup.send(embed=embed, view=view, wait=True)

    @app_commands.command(name="time_match", description="Same time for everyone: who went the furthest?")
    @app_commands.describe(seconds="How long everybody runs.")
    @app_commands.choices(seconds=[app_commands.Choice(name=f"{t} seconds", value=int(t)) for t in TIME_OPTIONS])
    async def time_match(self, interaction: discord.Interaction, seconds: app_commands.Choice[int]):
        await interaction.response.defer(thinking=True)

        quiz = TimeMatchRound(seconds.value)
        session = RaceSession(narrate=False)
        snapshot = session.snapshot_at(quiz.race_time)
        embed = render_race_snapshot(f"⏱️ Time match: {quiz.race_time}s", snapshot, [])
        embed.description = "When the time is the same, who went the furthest?"
        await self._send_with_view(interaction, embed, quiz)

    @app_commands.command(name="distance_match", description="Same distance for everyone: who arrived first?")
    @app_commands.describe(meters="Where the finish line goes.")
    @app_commands.choices(meters=[app_commands.Choice(name=f"{d}m", value=int(d)) for d in DISTANCE_OPTIONS])
    async def distance_match(self, interaction: discord.Interaction, meters: app_commands.Choice[int]):
        await interaction.response.defer(thinking=True)

        quiz = DistanceMatchRound(meters.value)
        message = await interaction.followup.send(f"📏 Lining up for {quiz.target_distance}m...", wait=True)

        session = RaceSession(target_distance=quiz.target_distance, speed_multiplier=DISTANCE_MATCH_MULTIPLIER, narrate=False)
        try:
            final = await play_race(message, session, f"📏 Distance match: {quiz.target_distance}m")
        except Exception as err:
            print(f"[AnimalDerby] Distance match failed for {interaction.user.id}: {err}")
            traceback.print_exc()
            await interaction.followup.send("The race could not be shown. Please try again.", ephemeral=True)
            return

        not_arrived = [racer.emoji for racer in final.racers if not racer.finished]
        embed = discord.Embed(
            title="Pick the animal that arrived first!",
            description="Not arrived: " + (" ".join(not_arrived) if not_arrived else "nobody"),
            color=discord.Color.blurple(),
        )
        await self._send_with_view(interaction, embed, quiz)

    @app_commands.command(name="all_records", description="Different times and distances: who is really the fastest?")
    async def all_records(self, interaction: discord.Interaction):
        await interaction.response.defer(thinking=True)

        quiz = AllRecordsRound()
        embed = discord.Embed(
            title="📋 All records",
            description=f"```text\n{format_records_table(quiz)}\n```\nWho is the fastest? (speed = distance ÷ time)",
            color=discord.Color.purple(),
        )
        await self._send_with_view(interaction, embed, quiz)

    @app_commands.command(name="score", description="Show your current score.")
    async def score(self, interaction: discord.Interaction):
        session = self.get_session(interaction.user.id)
        correct = sum(1 for result in session.history if result.correct)
        embed = discord.Embed(
            title="⭐ My score",
            description=f"**{session.score}** points ({correct} correct of {len(session.history)} guesses)",
            color=discord.Color.gold(),
        )
        await interaction.response.send_message(embed=embed, ephemeral=True)

    @app_commands.command(name="derby_help", description="How to play the animal races.")
    async def derby_help(self, interaction: discord.Interaction):
        await interaction.response.defer(ephemeral=True)

        help_lines = [
            "`/race` - Watch every animal race for 20 seconds.",
            "`/time_match <seconds>` - Same time for everyone; pick who went furthest.",
            "`/distance_match <meters>` - Same distance for everyone; pick who arrived first.",
            "`/all_records` - Different times and distances; pick the fastest speed.",
            "`/score` - Your points so far (+10 right, -1 wrong).",
        ]
        roster_line = " ".join(competitor.label for competitor in DEFAULT_ROSTER)

        embed = discord.Embed(
            title="Animal Derby Help",
            description="\n".join(help_lines),
            color=discord.Color.dark_blue(),
        )
        embed.add_field(name="Runners", value=roster_line, inline=False)
        embed.set_footer(text="Tip: to compare fairly, keep one thing the same!")
        await interaction.followup.send(embed=embed, ephemeral=True)


async def setup(bot: commands.Bot):
    await bot.add_cog(QuizCommands(bot))
    print("QuizCommands cog loaded.")
