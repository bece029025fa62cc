"""Tkinter desktop app for building and querying an anagram dictionary."""

from __future__ import annotations

import logging
import queue
import threading
import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from tkinter.scrolledtext import ScrolledText

from dictionary import AnagramDictionary
from models import LoadResult, LookupResult
from utils import format_group, load_config, log_insert, log_lookup, parse_words, save_config, setup_logging


class AnagramApp(tk.Tk):
    """Desktop UI for loading wordlists, adding words, and finding anagrams."""

    def __init__(self) -> None:
        super().__init__()
        self.config_data = load_config()
        setup_logging(self.config_data.get("log_level", "INFO"))
        self.logger = logging.getLogger(__name__)

        self.title("Anagram Dictionary")
        self.geometry("1000x680")
        self.minsize(820, 520)

        self.dictionary = AnagramDictionary(on_insert=log_insert, on_lookup=log_lookup)
        self.loading_thread: threading.Thread | None = None
        self.worker_queue: queue.Queue[tuple] = queue.Queue()
        self.is_loading = False

        self._build_vars()
        self._build_ui()
        self.after(100, self._poll_worker_queue)

    def _build_vars(self) -> None:
        self.wordlist_var = tk.StringVar(value=self.config_data.get("last_wordlist_path", ""))
        self.status_var = tk.StringVar(value="Load a wordlist or add words to start.")

    def _build_ui(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        top = ttk.Frame(self, padding=8)
        top.grid(row=0, column=0, sticky="ew")
        top.columnconfigure(1, weight=1)

        ttk.Label(top, text="Wordlist (.txt):").grid(row=0, column=0, sticky="w", padx=(0, 8))
        ttk.Entry(top, textvariable=self.wordlist_var).grid(row=0, column=1, sticky="ew", padx=(0, 8))
        ttk.Button(top, text="Browse", command=self._browse_wordlist).grid(row=0, column=2, padx=(0, 8))
        self.load_button = ttk.Button(top, text="Load Words", command=self._start_loading)
        self.load_button.grid(row=0, column=3)

        middle = ttk.Panedwindow(self, orient=tk.HORIZONTAL)
        middle.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 6))

        input_frame = ttk.LabelFrame(middle, text="Words", padding=8)
        input_frame.columnconfigure(0, weight=1)
        input_frame.rowconfigure(0, weight=1)
        self.input_text = ScrolledText(input_frame, wrap=tk.WORD, font=("Segoe UI", 11), height=12)
        self.input_text.grid(row=0, column=0, sticky="nsew")
        input_buttons = ttk.Frame(input_frame)
        input_buttons.grid(row=1, column=0, sticky="ew", pady=(8, 0))
        ttk.Button(input_buttons, text="Find Anagrams", command=self._find_clicked).grid(row=0, column=0, padx=(0, 8))
        ttk.Button(input_buttons, text="Add Words", command=self._add_clicked).grid(row=0, column=1, padx=(0, 8))
        ttk.Button(input_buttons, text="Clear", command=self._clear_input_and_results).grid(row=0, column=2)

        results_frame = ttk.LabelFrame(middle, text="Matches", padding=8)
        results_frame.columnconfigure(0, weight=1)
        results_frame.rowconfigure(0, weight=1)
        self.results_tree = ttk.Treeview(
            results_frame,
            columns=("query", "key", "status", "matches"),
            show="headings",
            height=14,
        )
        self.results_tree.heading("query", text="Word")
        self.results_tree.heading("key", text="Anagram Key")
        self.results_tree.heading("status", text="Status")
        self.results_tree.heading("matches", text="Matching Anagrams")
        self.results_tree.column("query", width=140, anchor=tk.W)
        self.results_tree.column("key", width=140, anchor=tk.W)
        self.results_tree.column("status", width=90, anchor=tk.W)
        self.results_tree.column("matches", width=280, anchor=tk.W)
        tree_scroll = ttk.Scrollbar(results_frame, orient=tk.VERTICAL, command=self.results_tree.yview)
        self.results_tree.configure(yscrollcommand=tree_scroll.set)
        self.results_tree.grid(row=0, column=0, sticky="nsew")
        tree_scroll.grid(row=0, column=1, sticky="ns")

        middle.add(input_frame, weight=1)
        middle.add(results_frame, weight=2)

        status_row = ttk.Frame(self, padding=(8, 0, 8, 8))
        status_row.grid(row=2, column=0, sticky="ew")
        status_row.columnconfigure(1, weight=1)
        ttk.Label(status_row, text="Status:").grid(row=0, column=0, sticky="w", padx=(0, 8))
        ttk.Label(status_row, textvariable=self.status_var).grid(row=0, column=1, sticky="w")
        self.progress = ttk.Progressbar(status_row, orient=tk.HORIZONTAL, length=220, mode="determinate", maximum=100)
        self.progress.grid(row=0, column=2, sticky="e")

    def _browse_wordlist(self) -> None:
        path = filedialog.askopenfilename(
            title="Select wordlist file",
            filetypes=[("Text files", "*.txt"), ("All files", "*.*")],
        )
        if path:
            self.wordlist_var.set(path)

    def _start_loading(self) -> None:
        if self.is_loading:
            return

        path = self.wordlist_var.get().strip()
        if not path:
            messagebox.showerror("Missing wordlist", "Please select a wordlist file first.")
            return
        resolved = str(Path(path).resolve())
        if not Path(resolved).exists():
            messagebox.showerror("File not found", f"Wordlist does not exist:\n{path}")
            return
        self.wordlist_var.set(resolved)

        self.is_loading = True
        self.progress.configure(value=0)
        self.status_var.set("Loading wordlist in background...")
        self.load_button.configure(state=tk.DISABLED)

        self.loading_thread = threading.Thread(target=self._load_worker, args=(resolved,), daemon=True)
        self.loading_thread.start()

    def _load_worker(self, path: str) -> None:
        try:
            result = self.dictionary.load_wordlist(
                wordlist_path=path,
                progress_callback=lambda pct: self.worker_queue.put(("progress", pct)),
            )
            self.worker_queue.put(("load_done", result))
        except Exception as exc:
            self.logger.exception("Failed loading wordlist")
            self.worker_queue.put(("error", f"Failed to load wordlist: {exc}"))

    def _poll_worker_queue(self) -> None:
        try:
            while True:
                event = self.worker_queue.get_nowait()
                kind = event[0]
                if kind == "progress":
                    pct = max(0.0, min(float(event[1]), 1.0))
                    self.progress.configure(value=int(pct * 100))
                elif kind == "load_done":
                    self._handle_load_done(event[1])
                elif kind == "error":
                    self._handle_worker_error(event[1])
        except queue.Empty:
            pass
        finally:
            self.after(100, self._poll_worker_queue)

    def _handle_load_done(self, result: LoadResult) -> None:
        self.is_loading = False
        self.load_button.configure(state=tk.NORMAL)
        self.progress.configure(value=100)
        self.status_var.set(
            f"Loaded {result.inserted_words} new words "
            f"({result.duplicate_words} duplicates, {result.unusable_words} unusable); "
            f"{result.unique_keys} anagram keys."
        )
        self.config_data["last_wordlist_path"] = result.source
        save_config(self.config_data)

    def _handle_worker_error(self, message: str) -> None:
        self.is_loading = False
        self.load_button.configure(state=tk.NORMAL)
        self.progress.configure(value=0)
        self.status_var.set("Loading failed.")
        messagebox.showerror("Loading error", message)

    def _input_words(self) -> list[str]:
        words = parse_words(self.input_text.get("1.0", tk.END))
        if not words:
            messagebox.showinfo("Empty input", "Type one or more words in the input area first.")
        return words

    def _add_clicked(self) -> None:
        words = self._input_words()
        if not words:
            return
        result = self.dictionary.insert_many(words, source="<input>")
        self.status_var.set(
            f"Added {result.inserted_words} of {result.total_tokens} words; "
            f"{result.unique_keys} anagram keys."
        )

    def _find_clicked(self) -> None:
        words = self._input_words()
        if not words:
            return
        results = [self.dictionary.find(word) for word in words]
        self._render_results(results)
        found = sum(1 for row in results if row.found)
        self.status_var.set(f"Found anagrams for {found} of {len(results)} words.")

    def _render_results(self, results: list[LookupResult]) -> None:
        self.results_tree.delete(*self.results_tree.get_children())
        for idx, row in enumerate(results):
            matches = format_group(row.matches) if row.found else "no matches"
            self.results_tree.insert(
                "",
                tk.END,
                iid=str(idx),
                values=(row.query, row.key or "", row.status, matches),
            )

    def _clear_input_and_results(self) -> None:
        self.input_text.delete("1.0", tk.END)
        self.results_tree.delete(*self.results_tree.get_children())
        self.status_var.set("Cleared input and results.")


def main() -> None:
    app = AnagramApp()
    app.mainloop()


if __name__ == "__main__":
    main()
