"""
Prompt templates for the planner.

The system prompt documents the exact JSON shape the model must return.
Lookup tables turn request codes into readable phrases for the user prompt.
"""

from typing import Dict


# =============================================================================
# System Prompt
# =============================================================================

SYSTEM_PROMPT = """Sen bir gezi planlayıcısısın. Verilen bilgilere göre gezi planı oluştur.

KURALLAR:
- Plan 3-5 durak içermeli. Duraklar zaman sırasına göre verilmeli.
- Koordinatları uydurma. Bir mekanın enlem/boylamından emin değilsen "lat" ve "lng" için null yaz.
- "crowd" alanı yalnızca "az", "orta" veya "yoğun" olabilir.
- "priceLevel" 1 ile 4 arasında bir tam sayı olmalı. "duration" dakika cinsindendir.
- Tüm metin alanlarını istenen yanıt dilinde yaz.

SADECE JSON formatında yanıt ver. Başka hiçbir şey yazma:

{
  "summary": "Plan özeti",
  "estimatedTotalCost": 500,
  "currency": "TRY",
  "stops": [
    {
      "timeRange": "09:00 - 10:30",
      "placeName": "Mekan",
      "address": "Adres",
      "description": "Açıklama",
      "reason": "Neden",
      "estimatedCost": 50,
      "crowd": "az",
      "transport": "Yürüyerek",
      "lat": 41.0,
      "lng": 28.9,
      "rating": 4.5,
      "ratingCount": 100,
      "priceLevel": 2,
      "category": "Kahvaltı",
      "duration": 90
    }
  ],
  "tips": ["İpucu 1"]
}"""


# =============================================================================
# User Prompt Templates
# =============================================================================

PLAN_PROMPT_TEMPLATE = """Şehir: {city}
Tarih: {date}
Süre: {hours} saat ({start_time}'dan başla)
Bütçe: {budget} {currency}
İlgi alanları: {interests}
Kalabalık: {crowd}
Ulaşım: {mobility}
{special_request_line}Dil: {language}
Detay seviyesi: {quality}

3-5 durak içeren plan oluştur. Emin olmadığın koordinatlar için null kullan. SADECE JSON döndür."""

CHAT_PROMPT_TEMPLATE = """Mevcut plan:
{plan_json}

Kullanıcı: {message}

Planı güncelle. Aynı JSON şemasını ve aynı dili koru. SADECE JSON döndür."""


# =============================================================================
# Lookup Tables
# =============================================================================

MOBILITY_LABELS: Dict[str, str] = {
    "walk": "Yürüyerek",
    "public": "Toplu taşıma",
    "taxi": "Taksi",
}

CROWD_PREFERENCE_LABELS: Dict[str, str] = {
    "avoid": "Kalabalık yerlerden kaçın",
    "prefer": "Kalabalık ve canlı yerleri tercih et",
    "any": "Fark etmez",
}

LANGUAGE_LABELS: Dict[str, str] = {
    "tr": "Türkçe",
    "en": "İngilizce",
}

QUALITY_MODE_LABELS: Dict[str, str] = {
    "fast": "Kısa: her durak için tek cümlelik açıklama",
    "balanced": "Dengeli: her durak için 1-2 cümlelik açıklama",
    "detailed": "Ayrıntılı: her durak için zengin açıklama ve gerekçe",
}
