"""Tkinter GUI: pick a recording, watch progress, read the report."""

from __future__ import annotations

import logging
import os
import queue
import threading

from .config import DEFAULT_CONFIG_PATH, Config, load_config
from .controller import AnalysisController
from .errors import BusyError, FileValidationError
from .logging_utils import setup_logging
from .models import AppStatus, ProcessingState
from .renderer import action_items_heading, render_analysis, render_attendees, render_action_item
from .storage import save_report

MEDIA_FILETYPES = [
    ("Audio/Video", "*.mp3 *.wav *.m4a *.ogg *.flac *.aac *.mp4 *.webm *.mov *.mkv"),
    ("All files", "*.*"),
]


def launch_gui(config_path: str = DEFAULT_CONFIG_PATH) -> None:
    import tkinter as tk
    from tkinter import filedialog, messagebox, ttk

    root = tk.Tk()
    root.title("Briefly")
    root.geometry("760x620")
    root.configure(bg="#0b0f14")

    style = ttk.Style(root)
    try:
        style.theme_use("clam")
    except tk.TclError:
        pass
    style.configure("TFrame", background="#0b0f14")
    style.configure("TLabel", background="#0b0f14", foreground="#d8e1ff")
    style.configure("Title.TLabel", font=("Segoe UI", 16, "bold"), foreground="#8bd3ff")
    style.configure("Error.TLabel", foreground="#ff7a7a")
    style.configure(
        "TButton",
        background="#132033",
        foreground="#e6f1ff",
        borderwidth=1,
        relief="flat",
    )
    style.map(
        "TButton",
        background=[("active", "#1b2a44")],
        foreground=[("active", "#ffffff")],
    )
    style.configure(
        "Neo.Horizontal.TProgressbar",
        troughcolor="#0f1a2a",
        background="#00e0ff",
        bordercolor="#0f1a2a",
        lightcolor="#00e0ff",
        darkcolor="#00b3cc",
    )

    if os.path.exists(config_path):
        try:
            config = load_config(config_path)
        except Exception:
            logging.getLogger(__name__).exception("Config load failed: %s", config_path)
            config = Config()
    else:
        config = Config()

    logger, log_path = setup_logging(
        log_dir=config.log_dir,
        level=logging.DEBUG if config.debug_logging else logging.INFO,
    )

    def _thread_excepthook(args) -> None:
        logger.exception(
            "Thread exception",
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    threading.excepthook = _thread_excepthook

    controller = AnalysisController(config)
    updates: "queue.Queue[ProcessingState]" = queue.Queue()
    controller.subscribe(updates.put)
    current = {"source": None}

    frame = ttk.Frame(root, padding=16)
    frame.pack(fill="both", expand=True)

    ttk.Label(frame, text="Briefly", style="Title.TLabel").pack(anchor="w")
    ttk.Label(
        frame,
        text="Turn a meeting recording into a summary, decisions and action items.",
    ).pack(anchor="w", pady=(0, 12))

    controls = ttk.Frame(frame)
    controls.pack(fill="x")
    browse_btn = ttk.Button(controls, text="Select recording...")
    browse_btn.pack(side="left")
    save_btn = ttk.Button(controls, text="Save report", state="disabled")
    save_btn.pack(side="left", padx=(8, 0))
    reset_btn = ttk.Button(controls, text="Reset")
    reset_btn.pack(side="right")

    validation_var = tk.StringVar(value="")
    ttk.Label(frame, textvariable=validation_var, style="Error.TLabel").pack(
        anchor="w", pady=(8, 0)
    )

    status_var = tk.StringVar(value="Select an audio or video file (max 500MB).")
    ttk.Label(frame, textvariable=status_var).pack(anchor="w", pady=(4, 4))
    progress = ttk.Progressbar(
        frame, mode="indeterminate", style="Neo.Horizontal.TProgressbar"
    )
    progress.pack(fill="x", pady=(0, 8))

    results = tk.Text(
        frame,
        wrap="word",
        bg="#111827",
        fg="#e6f1ff",
        insertbackground="#e6f1ff",
        relief="flat",
        font=("Segoe UI", 10),
    )
    results.pack(fill="both", expand=True)
    results.tag_configure("h1", font=("Segoe UI", 14, "bold"), foreground="#8bd3ff")
    results.tag_configure("h2", font=("Segoe UI", 11, "bold"), foreground="#9ad1ff")
    results.tag_configure("muted", foreground="#7b8aa6")
    results.configure(state="disabled")

    def _write_results(chunks) -> None:
        results.configure(state="normal")
        results.delete("1.0", "end")
        for text, tag in chunks:
            results.insert("end", text, tag or ())
        results.configure(state="disabled")

    def _show_analysis() -> None:
        analysis = controller.analysis
        if analysis is None:
            return
        chunks = [(f"{analysis.title}\n", "h1")]
        chunks.append((f"{analysis.sentiment}  |  {render_attendees(analysis)}\n\n", "muted"))
        chunks.append(("Executive Summary\n", "h2"))
        chunks.append((f"{analysis.summary.strip()}\n\n", None))
        chunks.append(("Key Highlights\n", "h2"))
        chunks.extend((f"- {point}\n", None) for point in analysis.key_points)
        chunks.append(("\nDecisions Made\n", "h2"))
        if analysis.decisions:
            chunks.extend((f"- {d}\n", None) for d in analysis.decisions)
        else:
            chunks.append(("No formal decisions detected.\n", "muted"))
        chunks.append((f"\n{action_items_heading(analysis)}\n", "h2"))
        if analysis.action_items:
            chunks.extend(
                (render_action_item(item) + "\n", None) for item in analysis.action_items
            )
        else:
            chunks.append(("No action items found.\n", "muted"))
        _write_results(chunks)

    def _apply_state(state: ProcessingState) -> None:
        if state.busy:
            status_var.set(state.message or "Analyzing meeting...")
            progress.start(12)
            browse_btn.configure(state="disabled")
            save_btn.configure(state="disabled")
            return
        progress.stop()
        browse_btn.configure(state="normal")
        if state.status == AppStatus.SUCCESS:
            status_var.set("Analysis complete.")
            save_btn.configure(state="normal")
            _show_analysis()
        elif state.status == AppStatus.ERROR:
            status_var.set(f"Analysis failed: {state.message}")
            save_btn.configure(state="disabled")
            _write_results([])
        else:
            status_var.set("Select an audio or video file (max 500MB).")
            save_btn.configure(state="disabled")
            _write_results([])

    def _poll_updates() -> None:
        latest = None
        while True:
            try:
                latest = updates.get_nowait()
            except queue.Empty:
                break
        if latest is not None:
            _apply_state(controller.state)
        root.after(150, _poll_updates)

    def _select_file() -> None:
        path = filedialog.askopenfilename(
            title="Select meeting recording", filetypes=MEDIA_FILETYPES
        )
        if not path:
            return
        try:
            controller.start(path)
        except FileValidationError as exc:
            validation_var.set(str(exc))
            return
        except BusyError as exc:
            messagebox.showinfo("Briefly", str(exc))
            return
        validation_var.set("")
        current["source"] = os.path.basename(path)
        logger.info("Selected %s", path)

    def _save() -> None:
        analysis = controller.analysis
        if analysis is None:
            return
        report = render_analysis(analysis, source_name=current["source"])
        try:
            report_path, _analysis_path = save_report(config.output_dir, analysis, report)
        except OSError as exc:
            logger.exception("Save failed")
            messagebox.showerror("Briefly", f"Save failed: {exc}")
            return
        status_var.set(f"Saved: {report_path}")
        logger.info("Report saved: %s", report_path)

    def _reset() -> None:
        logger.info("Reset")
        validation_var.set("")
        current["source"] = None
        controller.reset()

    def _on_close() -> None:
        logger.info("GUI closing (log: %s)", log_path)
        controller.reset()
        root.destroy()

    browse_btn.configure(command=_select_file)
    save_btn.configure(command=_save)
    reset_btn.configure(command=_reset)

    _poll_updates()
    root.protocol("WM_DELETE_WINDOW", _on_close)
    root.mainloop()
