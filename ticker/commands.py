from __future__ import annotations

import discord


def _in_configured_guild(bot, interaction) -> bool:
    return interaction.guild is not None and interaction.guild.id == bot.config.guild_id


def register_commands(bot):
    """Register all slash commands on the bot. Called once during setup."""
    guild_scope = discord.Object(id=bot.config.guild_id)

    async def refuse(interaction) -> None:
        await interaction.response.send_message(
            "This command can only be used in the configured server.", ephemeral=True
        )

    @bot.tree.command(name="toggle", description="Start or pause the stopwatch", guild=guild_scope)
    async def toggle(interaction):
        if not _in_configured_guild(bot, interaction):
            await refuse(interaction)
            return

        recorded = bot.session.toggle()
        await interaction.response.send_message(bot.reporter.build_toggle_content(recorded), ephemeral=True)

    @bot.tree.command(name="status", description="Show whether the stopwatch runs and the time elapsed", guild=guild_scope)
    async def status(interaction):
        if not _in_configured_guild(bot, interaction):
            await refuse(interaction)
            return

        await interaction.response.send_message(bot.reporter.build_status_content(), ephemeral=True)

    @bot.tree.command(name="entries", description="Show recorded entries grouped by day", guild=guild_scope)
    async def entries(interaction):
        if not _in_configured_guild(bot, interaction):
            await refuse(interaction)
            return

        await interaction.response.send_message(bot.reporter.build_log_content(), ephemeral=True)

    @bot.tree.error
    async def on_command_error(interaction, error):
        name = interaction.command.name if interaction.command else "unknown"
        bot.logger.error("/%s failed", name, exc_info=error)
        if not interaction.response.is_done():
            await interaction.response.send_message(f"Command failed: `{error}`", ephemeral=True)
