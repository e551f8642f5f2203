from pydantic_settings import BaseSettings

from .core.enums import SettlementMode
from .currency.schemas import DenominationRates, LedgerSettings, PriceModifier


class Settings(BaseSettings):
    app_name: str = "Tabletop Trade Ledger API"
    database_url: str = "sqlite:///./trade_ledger.db"
    debug: bool = False
    log_level: str = "INFO"

    # Collapse every balance into platinum on payment instead of paying in gold/platinum
    convert_currency: bool = False

    # Coins per gold piece; gold itself is always 1
    rate_pp: float = 0.1
    rate_ep: float = 2.0
    rate_sp: float = 10.0
    rate_cp: float = 100.0

    default_buy_modifier: int = 100
    default_sell_modifier: int = 100

    class Config:
        env_file = ".env"

    def ledger(self) -> LedgerSettings:
        return LedgerSettings(
            rates=DenominationRates(
                pp=self.rate_pp,
                ep=self.rate_ep,
                sp=self.rate_sp,
                cp=self.rate_cp,
            ),
            settlement_mode=(
                SettlementMode.CONVERT_TO_REFERENCE
                if self.convert_currency
                else SettlementMode.DIRECT_DENOMINATION
            ),
            default_price_modifier=PriceModifier(
                buy=self.default_buy_modifier,
                sell=self.default_sell_modifier,
            ),
        )


settings = Settings()
