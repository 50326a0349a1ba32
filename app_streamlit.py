import os

import requests
import streamlit as st

from config import MAX_PHOTO_BYTES
from render_utils import parse_explanation, to_data_uri, verdict_title

API_URL = os.environ.get("API_URL", "http://127.0.0.1:5000").rstrip("/")
MIN_SYMPTOM_CHARS = 10

st.set_page_config(page_title="Emerald Health Finder", page_icon="🩺", layout="centered")

st.title("🩺 Symptom Analysis")
st.info("Get a preliminary analysis using AI. This tool provides guidance but should not replace professional medical advice.")

symptoms = st.text_area(
    "What symptoms are you experiencing?",
    placeholder="e.g. I have a persistent cough, fever of 101°F, and feel very tired.",
)
photo = st.file_uploader("Upload a photo (optional)", type=["png", "jpg", "jpeg", "webp"])
st.caption("Photos can help provide more accurate analysis")

if st.button("Analyze Symptoms"):
    if len(symptoms.strip()) < MIN_SYMPTOM_CHARS:
        st.warning(f"Please describe your symptoms in at least {MIN_SYMPTOM_CHARS} characters.")
    elif photo is not None and photo.size > MAX_PHOTO_BYTES:
        st.warning("File too large. Please upload an image smaller than 10MB.")
    else:
        payload = {"symptoms": symptoms}
        if photo is not None:
            payload["photo"] = to_data_uri(photo.getvalue(), photo.type or "image/jpeg")
        try:
            with st.spinner("Analyzing..."):
                resp = requests.post(f"{API_URL}/api/symptom-check", json=payload, timeout=120)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException:
            st.error("Analysis failed. An error occurred while analyzing symptoms. Please try again later.")
        else:
            if data["isSerious"]:
                st.error(f"⚠️ {verdict_title(True)}")
            else:
                st.success(f"✅ {verdict_title(False)}")
            if data["suggestImmediateAction"]:
                st.error("**Seek Medical Care** — Based on your symptoms, we recommend consulting a healthcare provider promptly.")
            st.markdown(parse_explanation(data["explanation"]))

st.divider()
st.subheader("🏥 Find a Healthcare Provider")
location = st.text_input("Location", placeholder="e.g. Dublin, Cork, Galway")

if st.button("Search"):
    try:
        resp = requests.post(f"{API_URL}/api/practitioners", json={"locationQuery": location}, timeout=30)
        resp.raise_for_status()
    except requests.RequestException:
        st.error("Could not load practitioners. Please try again later.")
    else:
        for p in resp.json()["practitioners"]:
            badge = " 🏥 Hospital" if p["isHospital"] else ""
            st.markdown(f"**{p['name']}**{badge}  \n{p['specialty']}  \n{p['address']}  \n📞 {p['phone']}")
