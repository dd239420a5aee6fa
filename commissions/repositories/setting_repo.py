"""
Repository per le impostazioni chiave/valore (tabella app_settings).
"""
from typing import Optional

from commissions.models import AppSetting
from commissions.repositories.base import SqlAlchemyRepository

class SettingRepository(SqlAlchemyRepository[AppSetting]):
    def __init__(self, session):
        super().__init__(session, AppSetting)

    def get_by_key(self, key: str) -> Optional[AppSetting]:
        if not key:
            return None
        return self.session.query(AppSetting).filter_by(setting_key=key).first()

    def get_value(self, key: str) -> Optional[str]:
        setting = self.get_by_key(key)
        return setting.value if setting else None

    def set_value(self, key: str, value: Optional[str]) -> AppSetting:
        """Crea o aggiorna il valore. Non esegue il commit."""
        setting = self.get_by_key(key)
        if setting is None:
            setting = AppSetting(setting_key=key, value=value)
            self.add(setting)
        else:
            setting.value = value
        return setting
