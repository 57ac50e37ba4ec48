#!/usr/bin/env python3
"""Solfège Piano 命令行工具"""

import sys
import argparse
import random
from pathlib import Path
from typing import List, Optional

# 添加项目根目录到路径
sys.path.insert(0, str(Path(__file__).parent))

from solfege_piano.config import AppConfig, get_app_config, reload_config
from solfege_piano.core.controller import PianoController
from solfege_piano.core.exercise import random_degree_picker
from solfege_piano.core.pitch import parse_note, frequency_of, resolve_degree, scale_of
from solfege_piano.data.music_theory import DEGREES
from solfege_piano.ui import InteractiveManager, DictationDrill
from solfege_piano.utils.exceptions import SolfegePianoError
from solfege_piano.utils.logger import setup_logging, get_logger

logger = get_logger(__name__)


def show_frequencies(notes: List[str], config: AppConfig, ui: InteractiveManager) -> bool:
    """打印音符频率"""
    rows = []
    for name in notes:
        try:
            note = parse_note(name)
        except SolfegePianoError as e:
            ui.show_error(str(e))
            return False
        frequency = frequency_of(note.pitch_class, note.octave, config.reference_frequency)
        rows.append([note.name, f"{frequency:.2f}"])

    ui.show_table(f"🎵 频率 (A4 = {config.reference_frequency:g}Hz)", ["音符", "Hz"], rows)
    return True


def show_resolved(key: str, degrees: List[str], ui: InteractiveManager) -> bool:
    """打印唱名在指定调上的音名"""
    try:
        rows = [[degree, resolve_degree(key, degree)] for degree in degrees]
    except SolfegePianoError as e:
        ui.show_error(str(e))
        return False

    ui.show_table(f"🎼 {key} 调", ["唱名", "音名"], rows)
    return True


def show_scale(key: str, ui: InteractiveManager) -> bool:
    """打印整条音阶"""
    try:
        notes = scale_of(key)
    except SolfegePianoError as e:
        ui.show_error(str(e))
        return False

    ui.show_table(f"🎼 {key} 大调音阶", list(DEGREES), [notes])
    return True


def run_drill(
    config: AppConfig,
    key: Optional[str] = None,
    length: Optional[int] = None,
    seed: Optional[int] = None,
    ui: Optional[InteractiveManager] = None,
) -> bool:
    """命令行听写练习"""
    ui = ui or InteractiveManager()
    picker = random_degree_picker(random.Random(seed)) if seed is not None else None

    try:
        controller = PianoController(config, degree_picker=picker)
        if key:
            controller.select_key(key)
        if length is not None:
            controller.set_length(length)
    except SolfegePianoError as e:
        ui.show_error(str(e))
        return False

    DictationDrill(controller, ui).run()
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solfège Piano 虚拟钢琴与视唱听写")
    parser.add_argument("--config", type=Path, help="配置文件路径（默认 config.json）")
    parser.add_argument("--log-level", help="日志级别（默认从配置读取）")
    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    # freq 命令
    freq_parser = subparsers.add_parser("freq", help="计算音符频率")
    freq_parser.add_argument("notes", nargs="+", help="音符名，如 A4 C#3")

    # resolve 命令
    resolve_parser = subparsers.add_parser("resolve", help="把唱名解析为音名")
    resolve_parser.add_argument("key", help="主音，如 C、F#")
    resolve_parser.add_argument("degrees", nargs="+", help="唱名: do re mi fa sol la si")

    # scale 命令
    scale_parser = subparsers.add_parser("scale", help="显示某调的七个唱名")
    scale_parser.add_argument("key", help="主音")

    # drill 命令
    drill_parser = subparsers.add_parser("drill", help="命令行听写练习")
    drill_parser.add_argument("--key", "-k", help="主音（默认从配置读取）")
    drill_parser.add_argument("--length", "-n", type=int, help="音符数量")
    drill_parser.add_argument("--seed", type=int, help="随机种子，便于复现练习")

    # tui 命令
    subparsers.add_parser("tui", help="启动终端钢琴界面")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = reload_config(args.config) if args.config else get_app_config()
    ui = InteractiveManager()

    try:
        config.validate()
    except SolfegePianoError as e:
        ui.show_error(f"配置错误: {e}")
        return 1

    if args.command != "tui":
        setup_logging(args.log_level or config.log_level)

    if args.command == "freq":
        ok = show_frequencies(args.notes, config, ui)
    elif args.command == "resolve":
        ok = show_resolved(args.key, args.degrees, ui)
    elif args.command == "scale":
        ok = show_scale(args.key, ui)
    elif args.command == "drill":
        ok = run_drill(config, args.key, args.length, args.seed, ui)
    elif args.command == "tui":
        from solfege_piano.tui import run_tui

        return run_tui(config)
    else:
        parser.print_help()
        print("\n💡 提示：运行 'python cli.py drill' 开始听写练习，'python cli.py tui' 打开钢琴界面")
        return 0

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
