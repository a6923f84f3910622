from config.settings import RendererSettings, load_settings

__all__ = ["RendererSettings", "load_settings"]
