"""
ClockPanel Client - Settings Dialog Module

Implements the Settings dialog window with tabbed interface.

Author: ClockPanel Project
"""

import tkinter as tk
from tkinter import ttk, messagebox

from managers import ConfigManager


class SettingsDialog:
    """
    Settings dialog window with tabbed interface.

    Tabs: Connection (device address, timeout), Logging, Behavior.
    Saving applies the new device address to the main window.
    """

    def __init__(self, parent, config_mgr: ConfigManager, gui_parent=None):
        """
        Initialize settings dialog.

        Args:
            parent: Parent tkinter window
            config_mgr: Configuration manager instance
            gui_parent: Reference to main GUI instance (reconnected after save)
        """
        self.parent = parent
        self.config_mgr = config_mgr
        self.gui_parent = gui_parent

        # Create toplevel dialog window
        self.dialog = tk.Toplevel(parent)
        self.dialog.title("Settings")
        self.dialog.geometry("460x380")
        self.dialog.minsize(420, 340)

        # Make dialog modal
        self.dialog.transient(parent)
        self.dialog.grab_set()

        # Center dialog on parent window
        self.dialog.update_idletasks()
        x = parent.winfo_x() + (parent.winfo_width() // 2) - (self.dialog.winfo_width() // 2)
        y = parent.winfo_y() + (parent.winfo_height() // 2) - (self.dialog.winfo_height() // 2)
        self.dialog.geometry(f"+{x}+{y}")

        # Dictionary to store field variables
        self.fields = {}

        # Buttons first so pack(side=BOTTOM) keeps them visible
        self.create_buttons()
        self.create_tabs()

        self.load_config()

        self.dialog.protocol("WM_DELETE_WINDOW", self.dialog.destroy)

    def create_tabs(self):
        """Create tabbed notebook interface."""
        self.notebook = ttk.Notebook(self.dialog)
        self.notebook.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        self.create_connection_tab()
        self.create_logging_tab()
        self.create_behavior_tab()

    def _add_hint(self, frame, text: str, row: int):
        hint = ttk.Label(frame, text=text, font=("Arial", 8), foreground="gray", wraplength=380)
        hint.grid(row=row, column=0, sticky=tk.W, pady=(0, 15))

    def create_connection_tab(self):
        """Create Connection settings tab."""
        conn_frame = ttk.Frame(self.notebook, padding=20)
        self.notebook.add(conn_frame, text="Connection")

        # Device URL field
        ttk.Label(conn_frame, text="Device URL:", font=("Arial", 10)).grid(
            row=0, column=0, sticky=tk.W, pady=(0, 5))
        self.fields['device_url'] = tk.StringVar()
        ttk.Entry(conn_frame, textvariable=self.fields['device_url'],
                  width=40, font=("Arial", 10)).grid(row=1, column=0, sticky=tk.W+tk.E)
        self._add_hint(conn_frame, "Example: http://192.168.4.1 (device access point)", 2)

        # Device Port field
        ttk.Label(conn_frame, text="Device Port:", font=("Arial", 10)).grid(
            row=3, column=0, sticky=tk.W, pady=(0, 5))
        self.fields['device_port'] = tk.StringVar()
        ttk.Entry(conn_frame, textvariable=self.fields['device_port'],
                  width=10, font=("Arial", 10)).grid(row=4, column=0, sticky=tk.W, pady=(0, 15))

        # Timeout field
        ttk.Label(conn_frame, text="Request Timeout (seconds):", font=("Arial", 10)).grid(
            row=5, column=0, sticky=tk.W, pady=(0, 5))
        self.fields['request_timeout'] = tk.StringVar()
        ttk.Entry(conn_frame, textvariable=self.fields['request_timeout'],
                  width=10, font=("Arial", 10)).grid(row=6, column=0, sticky=tk.W)
        self._add_hint(conn_frame, "Leave empty to wait for the device indefinitely", 7)

        conn_frame.columnconfigure(0, weight=1)

    def create_logging_tab(self):
        """Create Logging settings tab."""
        logging_frame = ttk.Frame(self.notebook, padding=20)
        self.notebook.add(logging_frame, text="Logging")

        ttk.Label(logging_frame, text="Log Level:", font=("Arial", 10)).grid(
            row=0, column=0, sticky=tk.W, pady=(0, 5))
        self.fields['log_level'] = tk.StringVar()
        ttk.Combobox(logging_frame, textvariable=self.fields['log_level'],
                     values=["DEBUG", "INFO", "WARNING", "ERROR"],
                     state="readonly", width=15, font=("Arial", 10)).grid(
            row=1, column=0, sticky=tk.W, pady=(0, 15))

        ttk.Label(logging_frame, text="Log Retention (days):", font=("Arial", 10)).grid(
            row=2, column=0, sticky=tk.W, pady=(0, 5))
        self.fields['log_retention_days'] = tk.StringVar()
        ttk.Entry(logging_frame, textvariable=self.fields['log_retention_days'],
                  width=10, font=("Arial", 10)).grid(row=3, column=0, sticky=tk.W)
        self._add_hint(logging_frame, "Logs older than this many days will be automatically deleted", 4)

        self.fields['show_log_on_startup'] = tk.BooleanVar()
        ttk.Checkbutton(logging_frame, text="Show log panel on startup",
                        variable=self.fields['show_log_on_startup']).grid(
            row=5, column=0, sticky=tk.W, pady=(0, 5))

        logging_frame.columnconfigure(0, weight=1)

    def create_behavior_tab(self):
        """Create Behavior settings tab."""
        behavior_frame = ttk.Frame(self.notebook, padding=20)
        self.notebook.add(behavior_frame, text="Behavior")

        self.fields['confirm_before_format'] = tk.BooleanVar()
        ttk.Checkbutton(behavior_frame, text="Confirm before formatting the device filesystem",
                        variable=self.fields['confirm_before_format']).grid(
            row=0, column=0, sticky=tk.W, pady=(0, 5))
        self._add_hint(behavior_frame, "Formatting erases every file on the device and cannot be undone", 1)

    def create_buttons(self):
        """Create Save and Cancel buttons."""
        button_frame = ttk.Frame(self.dialog, padding=10)
        button_frame.pack(side=tk.BOTTOM, fill=tk.X)

        ttk.Button(button_frame, text="Cancel", command=self.dialog.destroy).pack(side=tk.RIGHT, padx=5)
        ttk.Button(button_frame, text="Save", command=self.save_settings).pack(side=tk.RIGHT, padx=5)

    def load_config(self):
        """Load current configuration values into fields."""
        self.fields['device_url'].set(self.config_mgr.get('device_url', 'http://192.168.4.1'))
        self.fields['device_port'].set(str(self.config_mgr.get('device_port', 80)))
        timeout = self.config_mgr.get('request_timeout')
        self.fields['request_timeout'].set('' if timeout is None else str(timeout))

        self.fields['log_level'].set(self.config_mgr.get('log_level', 'INFO'))
        self.fields['log_retention_days'].set(str(self.config_mgr.get('log_retention_days', 30)))
        self.fields['show_log_on_startup'].set(self.config_mgr.get('show_log_on_startup', True))

        self.fields['confirm_before_format'].set(self.config_mgr.get('confirm_before_format', True))

    def _show_error(self, message: str) -> bool:
        messagebox.showerror("Validation Error", message, parent=self.dialog)
        return False

    def validate_inputs(self) -> bool:
        """
        Validate all input fields.

        Returns:
            True if all inputs are valid, False otherwise
        """
        url = self.fields['device_url'].get().strip()
        if not url:
            return self._show_error("Device URL cannot be empty.")

        if not (url.startswith('http://') or url.startswith('https://')):
            return self._show_error("Device URL must start with http:// or https://")

        try:
            port = int(self.fields['device_port'].get().strip())
            if port < 1 or port > 65535:
                raise ValueError("Port out of range")
        except ValueError:
            return self._show_error("Device Port must be a number between 1 and 65535.")

        timeout_str = self.fields['request_timeout'].get().strip()
        if timeout_str:
            try:
                if float(timeout_str) <= 0:
                    raise ValueError("Timeout must be positive")
            except ValueError:
                return self._show_error("Request timeout must be a positive number or empty.")

        try:
            if int(self.fields['log_retention_days'].get().strip()) < 1:
                raise ValueError("Retention must be positive")
        except ValueError:
            return self._show_error("Log retention days must be a positive number.")

        return True

    def save_settings(self):
        """Save settings to configuration file and reconnect the main window."""
        if not self.validate_inputs():
            return

        timeout_str = self.fields['request_timeout'].get().strip()

        self.config_mgr.config.update({
            'device_url': self.fields['device_url'].get().strip(),
            'device_port': int(self.fields['device_port'].get().strip()),
            'request_timeout': float(timeout_str) if timeout_str else None,
            'log_level': self.fields['log_level'].get(),
            'log_retention_days': int(self.fields['log_retention_days'].get().strip()),
            'show_log_on_startup': self.fields['show_log_on_startup'].get(),
            'confirm_before_format': self.fields['confirm_before_format'].get()
        })
        self.config_mgr.save_config()

        if self.gui_parent:
            self.gui_parent.reconnect()

        self.dialog.destroy()
