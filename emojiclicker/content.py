"""The Emoji Clicker catalog: buildings, upgrades, achievements and the Aura tree."""
from __future__ import annotations

from emojiclicker.achievement import AchievementDef
from emojiclicker.definition import Catalog, GameConfig, SeasonDef
from emojiclicker.effect import (
    AchievementDouble,
    AchievementScale,
    ClickFlat,
    ClickMult,
    CostDiscount,
    CritChance,
    EventDuration,
    EventFrequency,
    GlobalMult,
    OfflineCap,
    OfflineMult,
    ProducerMult,
    StartBonus,
    Synergy,
    UnlockFlag,
    UnlockSkins,
)
from emojiclicker.formatting import fmt_num
from emojiclicker.prestige import PET_FLAG, SEASONS_FLAG, PrestigeNodeDef
from emojiclicker.producer import ProducerDef
from emojiclicker.requirement import Req
from emojiclicker.upgrade import UpgradeDef

ALL_SKINS = ["😀", "😂", "😎", "🤯", "👻", "🤖", "🦄", "😈", "🥳"]
DEFAULT_SKINS = ["😀", "😂", "😎"]

BUILDINGS = [
    ProducerDef("tap_buddy", 15, 0.1, "Tap Buddy", "👆", "A tiny friend who taps once in a while."),
    ProducerDef("auto_tapper", 100, 1, "Auto Tapper", "🖱️", "Clicks automatically, forever."),
    ProducerDef("kb_gremlin", 1100, 8, "Keyboard Gremlin", "⌨️", "Mashes keys to produce emojis."),
    ProducerDef("sticker_print", 12000, 47, "Sticker Printer", "🖨️", "Prints sheets of emoji stickers."),
    ProducerDef("emoji_farm", 130000, 260, "Emoji Farm", "🌾", "Grow emojis organically."),
    ProducerDef("mood_lab", 1.4e6, 1400, "Mood Lab", "🧪", "Synthesizes new emotions."),
    ProducerDef("meme_factory", 2e7, 7800, "Meme Factory", "🏭", "Mass-produce viral emoji memes."),
    ProducerDef("react_bank", 3.3e8, 44000, "Reaction Bank", "🏦", "Stores and compounds reactions."),
    ProducerDef("temple_feels", 5.1e9, 260000, "Temple of Feels", "🛕", "Ancient monks meditate on emoji."),
    ProducerDef("gc_portal", 7.5e10, 1.6e6, "Group Chat Portal", "🌀", "Opens portals to group chats."),
    ProducerDef("time_machine", 1e12, 1e7, "Unicode Time Machine", "🕰️", "Harvests emoji from all timelines."),
    ProducerDef("multiverse", 1.7e13, 6.5e7, "Multiverse Emulator", "🌌", "Simulates infinite emoji realities."),
]

SEASONS = [
    SeasonDef("spooky", "Spooky Week", "🎃", ("🎃", "👻", "🦇", "💀", "🕷️", "🧟", "🕸️")),
    SeasonDef("festive", "Festive Time", "🎁", ("🎁", "🎄", "⭐", "🔔", "❄️", "🧦", "🎅")),
    SeasonDef("love", "Love Season", "💘", ("💘", "💝", "💖", "💗", "💕", "🌹", "😍")),
    SeasonDef("party", "Party Mode", "🎆", ("🎆", "🎇", "🥳", "🎊", "🎈", "🪩", "🎵")),
]

NEWS_LINES = [
    "Breaking: Local emoji achieves sentience, demands PTO.",
    "Scientists discover emojis are 97% pure vibes.",
    "Tap Buddies unionize; demand dental plan.",
    "Emoji Farm reports record turnip yields! 🌾",
    "Meme Factory investigated for producing too many memes.",
    "Group Chat Portal opens; 47 unread messages immediately.",
    "Unicode Time Machine accidentally invents 🦤 in 1987.",
    "Reaction Bank stock up 420%, analysts confused.",
    "Temple of Feels monk achieves inner 😊.",
    "Multiverse Emulator discovers universe made entirely of 🍕.",
    "Your tap is in the top 0.001% of tappers!",
    "This just in: you're doing great! Keep tapping!",
    "Keyboard Gremlin caught sleeping on the job.",
    "Mood Lab creates new emotion: 'Tapisfied'.",
    "Sticker Printer jammed. Sticky situation.",
    "News: clicking things is surprisingly rewarding.",
    "Today's forecast: 100% chance of emojis.",
    "Experts agree: one more tap can't hurt.",
    "Your emojis are the envy of the multiverse.",
    "Fun fact: this ticker is 100% artisanal.",
]


def _upgrades() -> list[UpgradeDef]:
    ups = [
        # Click power
        UpgradeDef("stronger_fingers", 100, ClickFlat(1), Req.clicks(10),
                   "Stronger Fingers", "💪", "Clicks give +1 emoji."),
        UpgradeDef("iron_thumbs", 500, ClickFlat(5), Req.clicks(100),
                   "Iron Thumbs", "🦾", "Clicks give +5 emojis."),
        UpgradeDef("diamond_hands", 10000, ClickFlat(50), Req.clicks(500),
                   "Diamond Hands", "💎", "Clicks give +50 emojis."),
        UpgradeDef("quantum_tap", 1e6, ClickFlat(500), Req.clicks(2000),
                   "Quantum Tap", "⚛️", "Clicks give +500 emojis."),
        UpgradeDef("cosmic_press", 1e9, ClickFlat(5000), Req.clicks(10000),
                   "Cosmic Press", "🌠", "Clicks give +5000 emojis."),
        # Click multipliers
        UpgradeDef("double_tap", 1000, ClickMult(2), Req.clicks(200),
                   "Double Tap", "✌️", "Clicks are worth 2x."),
        UpgradeDef("triple_tap", 50000, ClickMult(3), Req.clicks(1000),
                   "Triple Tap", "🤟", "Clicks are worth 3x."),
        UpgradeDef("mega_tap", 5e6, ClickMult(5), Req.clicks(5000),
                   "Mega Tap", "🖐️", "Clicks are worth 5x."),
    ]

    # Three tiers per building
    for b in BUILDINGS:
        for prefix, cost_mult, mult, count in (
            ("better", 10, 2, 1),
            ("super", 500, 3, 25),
            ("ultra", 50000, 5, 50),
        ):
            ups.append(UpgradeDef(
                f"{prefix}_{b.id}",
                b.base_cost * cost_mult,
                ProducerMult(b.id, mult),
                Req.count(b.id, count),
                f"{prefix.title()} {b.display_name}",
                b.icon,
                f"{b.display_name} produces {mult}x more.",
            ))

    ups += [
        # Synergies
        UpgradeDef("farm_to_factory", 5e7, Synergy("emoji_farm", "meme_factory", 0.05),
                   Req.count("emoji_farm", 10), "Farm-to-Factory Pipeline", "🚜",
                   "Each Emoji Farm boosts Meme Factory by +5%."),
        UpgradeDef("lab_reactions", 5e8, Synergy("mood_lab", "react_bank", 0.05),
                   Req.count("mood_lab", 10), "Lab Reactions", "⚗️",
                   "Each Mood Lab boosts Reaction Bank by +5%."),
        UpgradeDef("temporal_portals", 5e12, Synergy("time_machine", "gc_portal", 0.03),
                   Req.count("time_machine", 5), "Temporal Portals", "⏳",
                   "Each Time Machine boosts Group Chat Portal by +3%."),
        UpgradeDef("multiverse_farming", 1e14, Synergy("multiverse", "emoji_farm", 0.10),
                   Req.count("multiverse", 1), "Multiverse Farming", "🪐",
                   "Each Multiverse Emulator boosts Emoji Farm by +10%."),
        # Global multipliers
        UpgradeDef("optimism", 5000, GlobalMult(1.10), Req.total_earned(1000),
                   "Optimism", "☀️", "All production +10%."),
        UpgradeDef("viral_growth", 500000, GlobalMult(1.25), Req.total_earned(100000),
                   "Viral Growth", "📈", "All production +25%."),
        UpgradeDef("exponential_joy", 5e7, GlobalMult(1.5), Req.total_earned(1e7),
                   "Exponential Joy", "🎉", "All production +50%."),
        UpgradeDef("singularity", 5e10, GlobalMult(2.0), Req.total_earned(1e10),
                   "Singularity", "🔮", "All production doubles."),
        # Hype pets
        UpgradeDef("hype_puppy", 10000, AchievementScale(0.005), Req.achievements(5),
                   "Hype Puppy", "🐕", "Each achievement gives +0.5% EPS."),
        UpgradeDef("hype_kitten", 1e6, AchievementScale(0.005), Req.achievements(20),
                   "Hype Kitten", "🐈", "Each achievement gives +0.5% EPS."),
        UpgradeDef("hype_parrot", 1e9, AchievementScale(0.005), Req.achievements(40),
                   "Hype Parrot", "🦜", "Each achievement gives +0.5% EPS."),
        UpgradeDef("hype_dragon", 1e12, AchievementScale(0.01), Req.achievements(60),
                   "Hype Dragon", "🐉", "Each achievement gives +1% EPS."),
    ]
    return ups


def _achievements() -> list[AchievementDef]:
    achs: list[AchievementDef] = []

    for n in (1, 10, 50, 100, 500, 1000, 5000, 10000, 50000, 100000, 500000, 1000000):
        achs.append(AchievementDef(
            f"clicks_{n}", Req.clicks(n), f"{n} Taps", "👆", f"Click {fmt_num(n)} times."
        ))

    for n in (100, 1e3, 1e4, 1e5, 1e6, 1e7, 1e8, 1e9, 1e10, 1e11, 1e12, 1e13, 1e14, 1e15):
        achs.append(AchievementDef(
            f"earned_{int(n)}", Req.total_earned(n), f"{fmt_num(n)} Emojis Earned", "🪙",
            f"Earn {fmt_num(n)} total emojis.",
        ))

    for n in (1, 10, 100, 1e3, 1e4, 1e5, 1e6, 1e7, 1e8, 1e9, 1e10):
        achs.append(AchievementDef(
            f"rate_{int(n)}", Req.rate(n), f"{fmt_num(n)} EPS", "⚡",
            f"Reach {fmt_num(n)} emojis per second.",
        ))

    for b in BUILDINGS:
        for n in (1, 25, 50, 100):
            achs.append(AchievementDef(
                f"{b.id}_{n}", Req.count(b.id, n), f"{n} {b.display_name}", b.icon,
                f"Own {n} {b.display_name}(s).",
            ))

    for n in (1, 5, 10, 25, 50, 100):
        achs.append(AchievementDef(
            f"golden_{n}", Req.golden_clicks(n), f"{n} Golden Catches", "✨",
            f"Click {n} golden emojis.",
        ))

    for n in (1, 2, 5, 10, 25):
        achs.append(AchievementDef(
            f"reboot_{n}", Req.reboots(n), f"Reboot {n}x", "🔄", f"Reboot {n} time(s).",
        ))

    for flag, name, icon, desc in (
        ("midnight", "Night Owl", "🦉", "Play at midnight."),
        ("idle60", "Patience", "🧘", "Do nothing for 60 seconds."),
        ("speed50", "Speed Demon", "👹", "50 clicks in 5 seconds."),
        ("diamond", "Diamond Finder", "💎", "Find a rare diamond."),
        ("konami", "Konami Master", "🎮", "Enter the code."),
        ("overcharge", "Overcharger", "⚡", "Hold the big emoji for 3s."),
        ("devnotes", "Dev Spy", "🔍", "Open the dev notes."),
        ("retro", "Retro Gamer", "👾", "Enable retro mode."),
        ("namegame", "Name Game", "🏷️", "Set a special save name."),
        ("void", "Void Walker", "🕳️", "Accept a Void Emoji offer."),
    ):
        achs.append(AchievementDef(f"secret_{flag}", Req.secret(flag), name, icon, desc))

    return achs


def _aura_tree() -> list[PrestigeNodeDef]:
    return [
        PrestigeNodeDef("aura_prod1", 1, GlobalMult(1.05), "Aura Boost I", "✨",
                        "+5% global production."),
        PrestigeNodeDef("aura_prod2", 3, GlobalMult(1.10), "Aura Boost II", "✨",
                        "+10% global production."),
        PrestigeNodeDef("aura_prod3", 10, GlobalMult(1.25), "Aura Boost III", "✨",
                        "+25% global production."),
        PrestigeNodeDef("aura_click1", 2, ClickMult(1.5), "Aura Tap I", "👆",
                        "+50% click power."),
        PrestigeNodeDef("aura_click2", 5, ClickMult(2), "Aura Tap II", "👆",
                        "+100% click power."),
        PrestigeNodeDef("aura_gold1", 3, EventDuration(1.5), "Lucky Aura I", "🍀",
                        "Golden emojis last 50% longer."),
        PrestigeNodeDef("aura_gold2", 5, EventFrequency(2), "Lucky Aura II", "🍀",
                        "Golden emojis 2x more common."),
        PrestigeNodeDef("aura_offline", 4, OfflineCap(8), "Offline Boost", "😴",
                        "Offline progress capped at 8 hours."),
        PrestigeNodeDef("aura_offline2", 8, OfflineMult(1.5), "Deep Sleep", "💤",
                        "Offline progress 50% more."),
        PrestigeNodeDef("aura_season", 10, UnlockFlag(SEASONS_FLAG), "Seasons Unlock", "🗓️",
                        "Unlock the Seasons system."),
        PrestigeNodeDef("aura_skin", 2, UnlockSkins(("🤯", "👻", "🤖")), "Skin Collector I",
                        "🎭", "Unlock 3 extra emoji skins."),
        PrestigeNodeDef("aura_skin2", 5, UnlockSkins(("🦄", "😈", "🥳")), "Skin Collector II",
                        "🎭", "Unlock 3 more emoji skins."),
        PrestigeNodeDef("aura_pet", 3, UnlockFlag(PET_FLAG), "Companion Egg", "🥚",
                        "Hatch a companion pet!"),
        PrestigeNodeDef("aura_start", 2, StartBonus(100), "Head Start", "🚀",
                        "Start reboots with 100 emojis."),
        PrestigeNodeDef("aura_start2", 8, StartBonus(10000), "Mega Start", "🚀",
                        "Start reboots with 10000."),
        PrestigeNodeDef("aura_crit", 4, CritChance(0.05, 10), "Critical Tap I", "💥",
                        "5% chance of 10x click."),
        PrestigeNodeDef("aura_crit2", 12, CritChance(0.10, 10), "Critical Tap II", "💥",
                        "10% chance of 10x click."),
        PrestigeNodeDef("aura_bulk", 6, CostDiscount(0.05), "Bulk Discount", "🏷️",
                        "Buildings cost 5% less."),
        PrestigeNodeDef("aura_bulk2", 15, CostDiscount(0.10), "Mega Discount", "🏷️",
                        "Buildings cost 10% less."),
        PrestigeNodeDef("aura_achbonus", 7, AchievementDouble(), "Trophy Polish", "🏆",
                        "Achievements give 2x bonus."),
    ]


def define_game(config: GameConfig | None = None) -> Catalog:
    return Catalog(
        config=config or GameConfig(),
        producers=list(BUILDINGS),
        upgrades=_upgrades(),
        achievements=_achievements(),
        prestige_nodes=_aura_tree(),
        all_skins=list(ALL_SKINS),
        default_skins=list(DEFAULT_SKINS),
        seasons=list(SEASONS),
        news_lines=list(NEWS_LINES),
    )
