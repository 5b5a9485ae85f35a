import discord
from discord.ext import commands

COG_PATHS = (
    'animal_derby.bot.commands',
    'animal_derby.bot.race_broadcast',
)

class AnimalDerbyBot(commands.Bot):
    """Custom Bot class hosting the animal race games."""

    def __init__(self, command_prefix, intents, guild_id=None):
        super().__init__(command_prefix=command_prefix, intents=intents)
        self.guild_id = guild_id # Store guild ID for syncing commands

    async def setup_hook(self):
        """Loads extensions (cogs) and syncs commands."""
        print("Running setup_hook...")
        for cog_path in COG_PATHS:
            try:
                await self.load_extension(cog_path)
                print(f"Successfully loaded cog: {cog_path}")
            except Exception as e:
                print(f"Failed to load cog {cog_path}: {e}")
                raise # Re-raise error to prevent bot from starting incorrectly

        if not self.guild_id:
            await self.tree.sync()
            print("Synced commands globally")
            return

        # Guild sync shows new commands immediately while testing
        guild = discord.Object(id=self.guild_id)
        self.tree.copy_global_to(guild=guild)
        try:
            await self.tree.sync(guild=guild)
            print(f"Synced commands to guild {self.guild_id}")
        except Exception as e:
            print(f"Failed to sync commands to guild {self.guild_id}: {e}")


    async def on_ready(self):
        """Called when the bot is ready."""
        print(f'Logged in as {self.user.name} ({self.user.id})')
        print('------')
