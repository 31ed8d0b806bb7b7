"""
投入示例数据：松江周边的温泉与评价
"""
import random

from app.core.database import SessionLocal
from app.models import Onsen, Review

SAMPLE_ONSENS = [
    {
        "name": "玉造温泉",
        "geo_lat": 35.4190,
        "geo_lng": 133.0100,
        "description": "日本最古の温泉のひとつ。美肌の湯として知られる。",
        "tags": "美肌,露天風呂,歴史",
    },
    {
        "name": "松江しんじ湖温泉",
        "geo_lat": 35.4700,
        "geo_lng": 133.0478,
        "description": "宍道湖畔に湧く温泉。夕日の眺望が美しい。",
        "tags": "湖景,眺望,駅近",
    },
    {
        "name": "出雲湯村温泉",
        "geo_lat": 35.2539,
        "geo_lng": 132.9397,
        "description": "斐伊川沿いの静かな山あいの湯。",
        "tags": "秘湯,川沿い",
    },
    {
        "name": "海潮温泉",
        "geo_lat": 35.3167,
        "geo_lng": 133.0500,
        "description": "出雲国風土記にも記される歴史ある温泉。",
        "tags": "歴史,家族向け",
    },
]

SAMPLE_COMMENTS = ["また来たい", "お湯が柔らかかった", "景色が最高", "少し混んでいた", None]


def seed_onsens(reviews_per_onsen: int = 3):
    """按名称去重创建温泉，并为新建的温泉添加随机评价"""
    db = SessionLocal()
    created_count = 0
    skipped_count = 0
    try:
        for onsen_data in SAMPLE_ONSENS:
            existing = db.query(Onsen).filter(Onsen.name == onsen_data["name"]).first()
            if existing:
                print(f"温泉「{onsen_data['name']}」已存在，跳过创建")
                skipped_count += 1
                continue

            onsen = Onsen(**onsen_data)
            for _ in range(reviews_per_onsen):
                onsen.reviews.append(
                    Review(rating=random.randint(1, 5), comment=random.choice(SAMPLE_COMMENTS))
                )
            db.add(onsen)
            db.commit()
            print(f"✓ 成功创建温泉：{onsen.name} (ID: {onsen.id})")
            created_count += 1
    finally:
        db.close()

    print(f"\n初始化完成！")
    print(f"  创建温泉: {created_count} 个")
    print(f"  跳过温泉: {skipped_count} 个")


if __name__ == "__main__":
    seed_onsens()
