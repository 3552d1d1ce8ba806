# -*- coding: utf-8 -*-
"""
script2board/cli.py

目的：
- 提供项目的命令行入口。
- init：创建 TaskPack（task.json + logs/）。
- run：调用 pipeline/orchestrator.py 跑工作流步骤（支持 --until / --model）。
- edit：用一份手改的 Markdown 替换剧本生成的输出，并重新同步分镜（原文模式）。
- export：把分镜列表写回 Markdown 表格。
- attach/detach：按镜头 id 挂载/移除图片、视频。

注意：
- CLI 不做业务细节：不解析表格、不调用模型。
- CLI 只负责参数解析 + 把任务交给 core/orchestrator。
"""

from __future__ import annotations

import argparse
from pathlib import Path

from script2board.core.workflow import MODELS, STEP_ORDER


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="script2board",
		description="Idea -> narrated script + storyboard table (TaskPack)",
	)

	sub = p.add_subparsers(dest="cmd", required=True)

	initp = sub.add_parser("init", help="Create a new TaskPack")
	initp.add_argument("--tasks_dir", required=True, help="e.g. output/tasks")
	initp.add_argument("--title", default="", help="任务标题，缺省为“未命名项目”")

	listp = sub.add_parser("list", help="List tasks, most recently updated first")
	listp.add_argument("--tasks_dir", required=True)

	runp = sub.add_parser("run", help="Run workflow steps for an existing TaskPack")
	runp.add_argument("--task_dir", required=True)
	runp.add_argument("--idea", default="", help="创意构思步骤的输入")
	runp.add_argument("--start", default=STEP_ORDER[0], choices=STEP_ORDER)
	runp.add_argument("--until", default=STEP_ORDER[1], choices=STEP_ORDER)
	runp.add_argument("--model", default="", help="模型 id，缺省取 SCRIPT2BOARD_MODEL；常用：" + ", ".join(MODELS))

	editp = sub.add_parser("edit", help="Replace the storyboard table text and re-sync shots")
	editp.add_argument("--task_dir", required=True)
	editp.add_argument("--in_path", required=True, help="手改后的 Markdown（UTF-8）")

	exportp = sub.add_parser("export", help="Write the shot list back as a Markdown table")
	exportp.add_argument("--task_dir", required=True)
	exportp.add_argument("--out_path", default=None, help="缺省写到 TaskPack/storyboard.md")

	attachp = sub.add_parser("attach", help="Attach media / video prompt to a shot by id")
	attachp.add_argument("--task_dir", required=True)
	attachp.add_argument("--shot_id", required=True)
	attachp.add_argument("--image_url", default=None)
	attachp.add_argument("--video_url", default=None)
	attachp.add_argument("--video_prompt", default=None)

	detachp = sub.add_parser("detach", help="Remove attached media from a shot by id")
	detachp.add_argument("--task_dir", required=True)
	detachp.add_argument("--shot_id", required=True)
	detachp.add_argument("--image", action="store_true")
	detachp.add_argument("--video", action="store_true")

	return p


def cmd_init(tasks_dir: str, title: str = "") -> Path:
	from script2board.core.io import task_paths
	from script2board.core.task_store import new_task, save_task

	task = new_task(title)
	paths = task_paths(Path(tasks_dir) / task.id)
	paths.ensure_dirs()
	save_task(paths.task, task)

	print(f"[OK] TaskPack created: {paths.root}")
	return paths.root


def cmd_list(tasks_dir: str) -> None:
	from script2board.core.task_store import list_tasks

	tasks = list_tasks(tasks_dir)
	for t in tasks:
		print(f"{t.id}\t{t.updated_at}\t{t.title}\tshots={len(t.storyboards)}")

	print(f"[OK] {len(tasks)} task(s)")


def cmd_run(task_dir: str, idea: str, until: str, start: str = STEP_ORDER[0], model: str = "") -> None:
	from script2board.pipeline.orchestrator import run_until
	from script2board.stages.base import StageContext

	ctx = StageContext(idea=idea, model=model, project_root=str(Path.cwd()))
	run_until(task_dir=task_dir, ctx=ctx, until=until, start=start)


def cmd_edit(task_dir: str, in_path: str) -> None:
	from script2board.core.io import task_paths
	from script2board.core.sync import SyncController
	from script2board.core.task_store import load_task, save_task, update_step, update_storyboards
	from script2board.core.workflow import STORYBOARD_TABLE_STEP

	paths = task_paths(task_dir)
	task = load_task(paths.task)
	text = Path(in_path).read_text(encoding="utf-8")

	result = SyncController().on_user_raw_text_change(text, task.storyboards)

	update_step(task, STORYBOARD_TABLE_STEP, output=text, status="completed" if text.strip() else "in-progress")
	if result.applied:
		update_storyboards(task, result.shots)
	else:
		print("[INFO] no shots parsed; keep existing shots")

	save_task(paths.task, task)
	print(f"[OK] shots = {len(task.storyboards)}")


def cmd_export(task_dir: str, out_path: str | None = None) -> Path:
	from script2board.core.extract import extract_full_script
	from script2board.core.io import task_paths
	from script2board.core.serializer import stringify_storyboard_table
	from script2board.core.task_store import load_task
	from script2board.core.workflow import STORYBOARD_TABLE_STEP

	paths = task_paths(task_dir)
	task = load_task(paths.task)

	# 口播文稿：优先取剧本输出里的“完整口播文稿”段，没有就用创意构思的输出
	full_script = extract_full_script(task.get_step(STORYBOARD_TABLE_STEP).output)
	if not full_script:
		full_script = task.get_step(STEP_ORDER[0]).output

	dest = Path(out_path) if out_path else paths.storyboard_md
	dest.parent.mkdir(parents=True, exist_ok=True)
	dest.write_text(stringify_storyboard_table(task.storyboards, full_script), encoding="utf-8")

	print(f"[OK] exported {len(task.storyboards)} shot(s) -> {dest}")
	return dest


def _require_shot(task, shot_id: str) -> None:
	from script2board.core.media import find_shot

	if find_shot(task.storyboards, shot_id) is None:
		raise ValueError(f"shot not found: {shot_id}")


def cmd_attach(task_dir: str, shot_id: str, image_url=None, video_url=None, video_prompt=None) -> None:
	from script2board.core import media
	from script2board.core.io import task_paths
	from script2board.core.task_store import load_task, save_task, update_storyboards

	if image_url is None and video_url is None and video_prompt is None:
		raise ValueError("nothing to attach (need --image_url / --video_url / --video_prompt)")

	paths = task_paths(task_dir)
	task = load_task(paths.task)
	_require_shot(task, shot_id)

	shots = task.storyboards
	if image_url is not None:
		shots = media.attach_image(shots, shot_id, image_url)
	if video_url is not None:
		shots = media.attach_video(shots, shot_id, video_url)
	if video_prompt is not None:
		shots = media.set_video_prompt(shots, shot_id, video_prompt)

	update_storyboards(task, shots)
	save_task(paths.task, task)
	print(f"[OK] updated {shot_id}")


def cmd_detach(task_dir: str, shot_id: str, image: bool = False, video: bool = False) -> None:
	from script2board.core import media
	from script2board.core.io import task_paths
	from script2board.core.task_store import load_task, save_task, update_storyboards

	if not image and not video:
		raise ValueError("nothing to detach (need --image / --video)")

	paths = task_paths(task_dir)
	task = load_task(paths.task)
	_require_shot(task, shot_id)

	shots = task.storyboards
	if image:
		shots = media.remove_image(shots, shot_id)
	if video:
		shots = media.remove_video(shots, shot_id)

	update_storyboards(task, shots)
	save_task(paths.task, task)
	print(f"[OK] updated {shot_id}")


def main(argv=None) -> None:
	args = build_parser().parse_args(argv)

	if args.cmd == "init":
		cmd_init(args.tasks_dir, args.title)
		return

	if args.cmd == "list":
		cmd_list(args.tasks_dir)
		return

	if args.cmd == "run":
		cmd_run(args.task_dir, args.idea, args.until, start=args.start, model=args.model)
		return

	if args.cmd == "edit":
		cmd_edit(args.task_dir, args.in_path)
		return

	if args.cmd == "export":
		cmd_export(args.task_dir, args.out_path)
		return

	if args.cmd == "attach":
		cmd_attach(
			args.task_dir,
			args.shot_id,
			image_url=args.image_url,
			video_url=args.video_url,
			video_prompt=args.video_prompt,
		)
		return

	if args.cmd == "detach":
		cmd_detach(args.task_dir, args.shot_id, image=args.image, video=args.video)
		return
