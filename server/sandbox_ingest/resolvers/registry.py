"""
Package Registry - Curated, pinned CDN coordinates for known specifiers
"""
from types import MappingProxyType
from typing import Mapping, Optional

from ..states import PackageConfig

REACT = ("react",)
REACT_DOM = ("react", "react-dom")

Registry = Mapping[str, PackageConfig]


def _pkg(package: str, version: str, subpath: Optional[str] = None, external: tuple = ()) -> PackageConfig:
    return PackageConfig(package=package, version=version, subpath=subpath, external=external)


def _react_icons(*sets: str) -> dict:
    return {f"react-icons/{s}": _pkg("react-icons", "5.4.0", f"/{s}", REACT) for s in sets}


def build_registry(entries: Mapping[str, PackageConfig]) -> Registry:
    """Freeze a specifier -> PackageConfig table; insertion order is kept"""
    return MappingProxyType(dict(entries))


_ENTRIES = {
    # React ecosystem
    "react": _pkg("react", "19.0.0"),
    "react/jsx-runtime": _pkg("react", "19.0.0", "/jsx-runtime"),
    "react/jsx-dev-runtime": _pkg("react", "19.0.0", "/jsx-dev-runtime"),
    "react-dom": _pkg("react-dom", "19.0.0"),
    "react-dom/client": _pkg("react-dom", "19.0.0", "/client"),

    # Animation
    "framer-motion": _pkg("framer-motion", "11.11.17", external=REACT_DOM),
    "motion": _pkg("motion", "12.0.0", external=REACT_DOM),
    "motion/react": _pkg("motion", "12.0.0", "/react", REACT_DOM),

    # Routing, both point to react-router-dom for Link/NavLink compatibility
    "react-router": _pkg("react-router-dom", "6.28.0", external=REACT_DOM),
    "react-router-dom": _pkg("react-router-dom", "6.28.0", external=REACT_DOM),

    # State management
    "zustand": _pkg("zustand", "5.0.1", external=REACT),
    "jotai": _pkg("jotai", "2.10.3", external=REACT),
    "@tanstack/react-query": _pkg("@tanstack/react-query", "5.62.0", external=REACT),

    # Forms
    "react-hook-form": _pkg("react-hook-form", "7.53.2", external=REACT),
    "zod": _pkg("zod", "3.23.8"),
    "yup": _pkg("yup", "1.4.0"),

    # UI libraries
    "lucide-react": _pkg("lucide-react", "0.469.0", external=REACT),
    "@heroicons/react/24/solid": _pkg("@heroicons/react", "2.2.0", "/24/solid", REACT),
    "@heroicons/react/24/outline": _pkg("@heroicons/react", "2.2.0", "/24/outline", REACT),
    "react-icons": _pkg("react-icons", "5.4.0", external=REACT),

    # Radix UI
    "@radix-ui/react-dialog": _pkg("@radix-ui/react-dialog", "1.1.2", external=REACT_DOM),
    "@radix-ui/react-dropdown-menu": _pkg("@radix-ui/react-dropdown-menu", "2.1.2", external=REACT_DOM),
    "@radix-ui/react-popover": _pkg("@radix-ui/react-popover", "1.1.2", external=REACT_DOM),
    "@radix-ui/react-tooltip": _pkg("@radix-ui/react-tooltip", "1.1.3", external=REACT_DOM),
    "@radix-ui/react-tabs": _pkg("@radix-ui/react-tabs", "1.1.1", external=REACT_DOM),
    "@radix-ui/react-select": _pkg("@radix-ui/react-select", "2.1.2", external=REACT_DOM),
    "@radix-ui/react-checkbox": _pkg("@radix-ui/react-checkbox", "1.1.2", external=REACT_DOM),
    "@radix-ui/react-switch": _pkg("@radix-ui/react-switch", "1.1.1", external=REACT_DOM),
    "@radix-ui/react-slider": _pkg("@radix-ui/react-slider", "1.2.1", external=REACT_DOM),
    "@radix-ui/react-slot": _pkg("@radix-ui/react-slot", "1.1.0", external=REACT_DOM),
    "@radix-ui/react-accordion": _pkg("@radix-ui/react-accordion", "1.2.1", external=REACT_DOM),
    "@radix-ui/react-alert-dialog": _pkg("@radix-ui/react-alert-dialog", "1.1.2", external=REACT_DOM),
    "@radix-ui/react-aspect-ratio": _pkg("@radix-ui/react-aspect-ratio", "1.1.0", external=REACT_DOM),
    "@radix-ui/react-avatar": _pkg("@radix-ui/react-avatar", "1.1.1", external=REACT_DOM),
    "@radix-ui/react-collapsible": _pkg("@radix-ui/react-collapsible", "1.1.1", external=REACT_DOM),
    "@radix-ui/react-context-menu": _pkg("@radix-ui/react-context-menu", "2.2.2", external=REACT_DOM),
    "@radix-ui/react-hover-card": _pkg("@radix-ui/react-hover-card", "1.1.2", external=REACT_DOM),
    "@radix-ui/react-label": _pkg("@radix-ui/react-label", "2.1.0", external=REACT_DOM),
    "@radix-ui/react-menubar": _pkg("@radix-ui/react-menubar", "1.1.2", external=REACT_DOM),
    "@radix-ui/react-navigation-menu": _pkg("@radix-ui/react-navigation-menu", "1.2.1", external=REACT_DOM),
    "@radix-ui/react-progress": _pkg("@radix-ui/react-progress", "1.1.0", external=REACT_DOM),
    "@radix-ui/react-radio-group": _pkg("@radix-ui/react-radio-group", "1.2.1", external=REACT_DOM),
    "@radix-ui/react-scroll-area": _pkg("@radix-ui/react-scroll-area", "1.2.0", external=REACT_DOM),
    "@radix-ui/react-separator": _pkg("@radix-ui/react-separator", "1.1.0", external=REACT_DOM),
    "@radix-ui/react-toast": _pkg("@radix-ui/react-toast", "1.2.2", external=REACT_DOM),
    "@radix-ui/react-toggle": _pkg("@radix-ui/react-toggle", "1.1.0", external=REACT_DOM),
    "@radix-ui/react-toggle-group": _pkg("@radix-ui/react-toggle-group", "1.1.0", external=REACT_DOM),
    "@headlessui/react": _pkg("@headlessui/react", "2.2.0", external=REACT_DOM),

    # Utilities
    "clsx": _pkg("clsx", "2.1.1"),
    "classnames": _pkg("classnames", "2.5.1"),
    "tailwind-merge": _pkg("tailwind-merge", "2.5.4"),
    "class-variance-authority": _pkg("class-variance-authority", "0.7.1"),
    "uuid": _pkg("uuid", "11.0.3"),
    "nanoid": _pkg("nanoid", "5.0.9"),
    "lodash": _pkg("lodash", "4.17.21"),
    "lodash-es": _pkg("lodash-es", "4.17.21"),
    "immer": _pkg("immer", "10.1.1"),
    "match-sorter": _pkg("match-sorter", "6.3.4"),
    "fuse.js": _pkg("fuse.js", "7.0.0"),

    # Date/time
    "date-fns": _pkg("date-fns", "4.1.0"),
    "dayjs": _pkg("dayjs", "1.11.13"),
    "react-day-picker": _pkg("react-day-picker", "9.4.3", external=REACT),
    "react-datepicker": _pkg("react-datepicker", "7.5.0", external=REACT_DOM),

    # Data fetching
    "axios": _pkg("axios", "1.7.9"),
    "swr": _pkg("swr", "2.2.5", external=REACT),

    # Charts
    "recharts": _pkg("recharts", "2.14.1", external=REACT_DOM),
    "victory": _pkg("victory", "37.3.2", external=REACT),
    "@nivo/core": _pkg("@nivo/core", "0.88.0", external=REACT_DOM),
    "@nivo/bar": _pkg("@nivo/bar", "0.88.0", external=REACT_DOM),
    "@nivo/line": _pkg("@nivo/line", "0.88.0", external=REACT_DOM),
    "@nivo/pie": _pkg("@nivo/pie", "0.88.0", external=REACT_DOM),

    # Tables and virtualization
    "@tanstack/react-table": _pkg("@tanstack/react-table", "8.20.5", external=REACT),
    "@tanstack/react-virtual": _pkg("@tanstack/react-virtual", "3.10.9", external=REACT_DOM),
    "react-virtualized": _pkg("react-virtualized", "9.22.5", external=REACT_DOM),
    "react-window": _pkg("react-window", "1.8.10", external=REACT_DOM),

    # Toasts, overlays, command palette
    "sonner": _pkg("sonner", "1.7.0", external=REACT_DOM),
    "react-hot-toast": _pkg("react-hot-toast", "2.4.1", external=REACT_DOM),
    "vaul": _pkg("vaul", "1.1.1", external=REACT_DOM),
    "cmdk": _pkg("cmdk", "1.0.4", external=REACT_DOM),
    "@floating-ui/react": _pkg("@floating-ui/react", "0.26.28", external=REACT_DOM),
    "react-tooltip": _pkg("react-tooltip", "5.28.0", external=REACT_DOM),

    # Drag and drop, carousels, resizing
    "@dnd-kit/core": _pkg("@dnd-kit/core", "6.3.1", external=REACT_DOM),
    "@dnd-kit/sortable": _pkg("@dnd-kit/sortable", "10.0.0", external=REACT),
    "swiper": _pkg("swiper", "11.1.15"),
    "embla-carousel-react": _pkg("embla-carousel-react", "8.5.1", external=REACT),
    "react-resizable-panels": _pkg("react-resizable-panels", "2.1.7", external=REACT_DOM),
    "re-resizable": _pkg("re-resizable", "6.10.3", external=REACT_DOM),

    # Animation and hooks
    "@react-spring/web": _pkg("@react-spring/web", "9.7.5", external=REACT_DOM),
    "react-spring": _pkg("@react-spring/web", "9.7.5", external=REACT_DOM),
    "react-use": _pkg("react-use", "17.5.1", external=REACT_DOM),
    "usehooks-ts": _pkg("usehooks-ts", "3.1.0", external=REACT),
    "react-intersection-observer": _pkg("react-intersection-observer", "9.13.1", external=REACT),

    # Markdown, code, rich text
    "react-markdown": _pkg("react-markdown", "9.0.1", external=REACT),
    "react-syntax-highlighter": _pkg("react-syntax-highlighter", "15.6.1", external=REACT),
    "remark-gfm": _pkg("remark-gfm", "4.0.0"),
    "@tiptap/react": _pkg("@tiptap/react", "2.10.4", external=REACT_DOM),
    "@tiptap/starter-kit": _pkg("@tiptap/starter-kit", "2.10.4"),

    # Inputs
    "react-select": _pkg("react-select", "5.8.3", external=REACT_DOM),
    "react-input-mask": _pkg("react-input-mask", "2.0.4", external=REACT_DOM),
    "react-number-format": _pkg("react-number-format", "5.4.2", external=REACT),
    "react-colorful": _pkg("react-colorful", "5.6.1", external=REACT_DOM),
    "rc-slider": _pkg("rc-slider", "11.1.7", external=REACT_DOM),
    "@hookform/resolvers": _pkg("@hookform/resolvers", "3.9.1", external=REACT),

    # Media and files
    "react-player": _pkg("react-player", "2.16.0", external=REACT),
    "react-dropzone": _pkg("react-dropzone", "14.3.5", external=REACT),
    "@react-pdf/renderer": _pkg("@react-pdf/renderer", "4.1.5", external=REACT),

    # Misc React components
    "react-copy-to-clipboard": _pkg("react-copy-to-clipboard", "5.1.0", external=REACT),
    "qrcode.react": _pkg("qrcode.react", "4.2.0", external=REACT),
    "react-qr-code": _pkg("react-qr-code", "2.0.15", external=REACT),
    "react-confetti": _pkg("react-confetti", "6.1.0", external=REACT),
    "canvas-confetti": _pkg("canvas-confetti", "1.9.3"),
    "react-error-boundary": _pkg("react-error-boundary", "4.1.2", external=REACT),
    "react-helmet-async": _pkg("react-helmet-async", "2.0.5", external=REACT_DOM),
    "react-json-view": _pkg("react-json-view", "1.21.3", external=REACT_DOM),
    "@uiw/react-json-view": _pkg("@uiw/react-json-view", "2.0.0-alpha.27", external=REACT_DOM),

    # Maps (may need API keys)
    "@react-google-maps/api": _pkg("@react-google-maps/api", "2.20.3", external=REACT_DOM),
    "react-map-gl": _pkg("react-map-gl", "7.1.7", external=REACT_DOM),

    # Internationalization
    "react-i18next": _pkg("react-i18next", "15.1.3", external=REACT),
    "i18next": _pkg("i18next", "24.0.5"),

    # Icon sets
    **_react_icons("fa", "fa6", "md", "io", "io5", "hi", "hi2", "bs", "ai", "bi", "ri", "fi", "gi", "si", "tb", "lu"),
}

PACKAGE_REGISTRY: Registry = build_registry(_ENTRIES)
